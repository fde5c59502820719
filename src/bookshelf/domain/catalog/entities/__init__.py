from bookshelf.domain.catalog.entities.author import Author
from bookshelf.domain.catalog.entities.book import Book, BookWithRelations
from bookshelf.domain.catalog.entities.publisher import Publisher

__all__ = ["Author", "Book", "BookWithRelations", "Publisher"]
