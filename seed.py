import logging

from library import Library

logger = logging.getLogger(__name__)


def seed_demo_data(library: Library) -> None:
    """Fill ``library`` with a small catalog, two members and one open loan."""
    factory = library.librarian

    dune = factory.create_book("Dune", "Frank Herbert", 1965, 2)
    library.add_book(dune)
    library.add_book(factory.create_book("Clean Code", "Robert C. Martin", 2008, 3))
    library.add_book(factory.create_book("The Hobbit", "J.R.R. Tolkien", 1937, 1))

    alice = factory.create_member("Alice Reader", 1)
    library.add_member(alice)
    library.add_member(factory.create_member("Bob Borrower", 2))

    alice.borrow_book(dune)

    logger.info("Seeded demo data: %s", library.get_library_status())
