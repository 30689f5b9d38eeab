from book import Book
from loan import Loan
from member import LoanResult, Member


def test_borrow_available_book():
    member = Member("Ada", 1)
    book = Book("Dune", "Frank Herbert", 1965, 2)

    assert member.borrow_book(book) is LoanResult.SUCCESS
    assert book.amount == 1
    assert len(member.loans) == 1
    loan = member.loans[0]
    assert loan.book is book
    assert loan.member is member
    assert loan.is_active


def test_borrow_unavailable_book_changes_nothing():
    member = Member("Ada", 1)
    book = Book("Dune", "Frank Herbert", 1965, 0)

    result = member.borrow_book(book)

    assert result is LoanResult.BOOK_UNAVAILABLE
    assert not result
    assert member.loans == []
    assert book.amount == 0


def test_borrow_then_return_round_trip():
    member = Member("Ada", 1)
    book = Book("Dune", "Frank Herbert", 1965, 1)

    member.borrow_book(book)
    assert not book.is_available()
    assert member.return_book(book) is LoanResult.SUCCESS

    assert book.is_available()
    assert book.amount == 1
    assert len(member.loans) == 1
    assert member.loans[0].return_date is not None
    assert member.active_loans() == []


def test_return_without_loan_is_reported():
    member = Member("Ada", 1)
    book = Book("Dune", "Frank Herbert", 1965, 1)

    assert member.return_book(book) is LoanResult.NO_MATCHING_LOAN
    assert book.amount == 1


def test_return_matches_by_identity_not_title():
    member = Member("Ada", 1)
    borrowed = Book("Dune", "Frank Herbert", 1965, 1)
    twin = Book("Dune", "Frank Herbert", 1965, 1)
    member.borrow_book(borrowed)

    assert member.return_book(twin) is LoanResult.NO_MATCHING_LOAN
    assert twin.amount == 1
    assert borrowed.amount == 0


def test_second_return_does_not_check_in_twice():
    member = Member("Ada", 1)
    book = Book("Dune", "Frank Herbert", 1965, 1)
    member.borrow_book(book)

    member.return_book(book)
    assert member.return_book(book) is LoanResult.NO_MATCHING_LOAN
    assert book.amount == 1


def test_return_closes_oldest_active_loan_first():
    member = Member("Ada", 1)
    book = Book("Dune", "Frank Herbert", 1965, 2)
    member.borrow_book(book)
    member.borrow_book(book)

    member.return_book(book)

    assert member.loans[0].return_date is not None
    assert member.loans[1].is_active


def test_borrowed_book_by_title():
    member = Member("Ada", 1)
    book = Book("Dune", "Frank Herbert", 1965, 1)
    assert member.borrowed_book("Dune") is None
    member.borrow_book(book)
    assert member.borrowed_book("Dune") is book
    member.return_book(book)
    assert member.borrowed_book("Dune") is None


def test_member_constructor_is_permissive():
    member = Member("", -4)
    assert str(member) == " (-4)"


def test_mark_as_returned_is_not_idempotent():
    member = Member("Ada", 1)
    book = Book("Dune", "Frank Herbert", 1965, 0)
    loan = Loan(member, book)
    loan.mark_as_returned()
    first_return = loan.return_date
    loan.mark_as_returned()
    assert book.amount == 2
    assert loan.return_date >= first_return


def test_new_loan_is_active_with_start_time():
    loan = Loan(Member("Ada", 1), Book("Dune", "Frank Herbert", 1965, 1))
    assert loan.is_active
    assert loan.loan_date is not None
    assert loan.return_date is None
