# -*- coding: utf-8 -*-
"""
Minimal books catalogue: a single ``bookById`` query over hardcoded data.
"""

from typing import Any, Dict, Optional

from ..schema import (
    ExecutableSchema,
    ResolverBindingTable,
    build_executable_schema,
    load_schema_source,
    parse_schema_document,
)

DEFAULT_QUERY = '{ bookById(id: "book-1") { name } }'

books = [
    {
        "id": "book-1",
        "name": "Harry Potter and the Philosopher's Stone",
        "pageCount": 223,
        "authorId": "author-1",
    },
    {
        "id": "book-2",
        "name": "Moby Dick",
        "pageCount": 635,
        "authorId": "author-2",
    },
    {
        "id": "book-3",
        "name": "Interview with the vampire",
        "pageCount": 371,
        "authorId": "author-3",
    },
]

authors = [
    {"id": "author-1", "firstName": "Joanne", "lastName": "Rowling"},
    {"id": "author-2", "firstName": "Herman", "lastName": "Melville"},
    {"id": "author-3", "firstName": "Anne", "lastName": "Rice"},
]


def _find(entries, id_: Optional[str]) -> Optional[Dict[str, Any]]:
    return next((e for e in entries if e["id"] == id_), None)


bindings = ResolverBindingTable()


@bindings.resolver("Query.bookById")
def resolve_book_by_id(_root, args, _info):
    return _find(books, args.get("id"))


@bindings.resolver("Book.author")
def resolve_author(book, _args, _info):
    return _find(authors, book["authorId"])


def build_schema() -> ExecutableSchema:
    """ Build the books executable schema from the packaged resource. """
    return build_executable_schema(
        parse_schema_document(
            load_schema_source("books.graphql", package=__package__)
        ),
        bindings,
    )
