"""Errors raised by the catalog services."""


class DomainError(Exception):
    """Base class for catalog rule violations; the web layer maps them to responses."""


class ResourceNotFoundError(DomainError):
    pass


class AuthorNotFoundError(ResourceNotFoundError):
    def __init__(self, message: str = "Author not found"):
        super().__init__(message)


class AuthorHasBooksError(DomainError):
    """An author cannot be deleted while books still name it as their author."""

    def __init__(self, author_id: int, book_count: int):
        self.author_id = author_id
        self.book_count = book_count
        super().__init__(f"Author {author_id} still has {book_count} book(s) and cannot be deleted")
