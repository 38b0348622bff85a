"""BaseRepository helpers and the typed repository declarations."""

from typing import get_args

from vendorhub.application.dtos.blog import BlogResult
from vendorhub.infrastructure.persistence.models import Blog
from vendorhub.infrastructure.persistence.repositories.base import (
    BaseRepository,
    ModelType,
    ResultType,
    contains_pattern,
)
from vendorhub.infrastructure.persistence.repositories.blog_repo import BlogRepository


def test_contains_pattern_escapes_like_wildcards() -> None:
    assert contains_pattern("50%_off") == "%50\\%\\_off%"
    assert contains_pattern("a\\b") == "%a\\\\b%"


def test_repositories_bind_model_and_result_types() -> None:
    assert BaseRepository.__parameters__ == (ModelType, ResultType)
    assert ModelType.__bound__ is not None
    assert get_args(BlogRepository.__orig_bases__[0]) == (Blog, BlogResult)
