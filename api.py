import logging
from datetime import datetime, timezone
from threading import RLock
from typing import List, Optional

from fastapi import FastAPI, HTTPException, Query, Depends, Security
from fastapi.security import APIKeyHeader
from pydantic import BaseModel, Field

from config import settings
from errors import DuplicateMemberError, InvalidArgumentError
from library import Library, get_library
from member import LoanResult, Member
from seed import seed_demo_data

logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)

# Every registry access from request handlers goes through this lock.
registry_lock = RLock()

app = FastAPI(title=f"{settings.app_name} API", version=settings.app_version)

if settings.seed_demo_data:
    with registry_lock:
        if not get_library().get_books():
            seed_demo_data(get_library())

# --- Security ---
api_key_header = APIKeyHeader(name="X-API-Key")

def get_api_key(api_key: str = Security(api_key_header)):
    """Dependency guarding librarian-only endpoints."""
    if api_key == settings.api_key:
        return api_key
    logger.warning("Rejected request with an invalid API key")
    raise HTTPException(status_code=403, detail="Could not validate credentials")

def get_lib() -> Library:
    return get_library()

# --- Models ---
class BookModel(BaseModel):
    title: str
    author: str
    year: int
    amount: int
    total_copies: int

class BookCreateModel(BaseModel):
    title: str
    author: str
    year: int
    amount: int = Field(default=1, description="Copies placed on the shelf")

class MemberModel(BaseModel):
    name: str
    id: int
    active_loans: int
    total_loans: int

class MemberCreateModel(BaseModel):
    name: str
    id: int

class LoanModel(BaseModel):
    member_id: int
    member_name: str
    title: str
    loan_date: str
    return_date: Optional[str] = None

class LoanRequestModel(BaseModel):
    member_id: int
    title: str

class LoginModel(BaseModel):
    user_name: str
    user_id: str

class UserModel(BaseModel):
    user_name: str
    user_id: str
    role: str

class StatusModel(BaseModel):
    total_books: int
    available_books: int
    total_members: int
    active_loans: int
    summary: str

def _member_or_404(lib: Library, member_id: int) -> Member:
    member = lib.find_member(member_id)
    if member is None:
        raise HTTPException(status_code=404, detail="Member not found.")
    return member

# --- Health ---
@app.get("/health")
def health(lib: Library = Depends(get_lib)):
    with registry_lock:
        total_books = len(lib.get_books())
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "total_books": total_books,
        "version": settings.app_version,
    }

@app.get("/status", response_model=StatusModel)
def get_status(lib: Library = Depends(get_lib)):
    """Book, member and loan counters, computed fresh."""
    with registry_lock:
        status = lib.get_status()
    return StatusModel(
        total_books=status.total_books,
        available_books=status.available_books,
        total_members=status.total_members,
        active_loans=status.active_loans,
        summary=str(status),
    )

# --- Books ---
@app.get("/books", response_model=List[BookModel])
def get_books(
    available: bool = Query(False, description="Only books with a copy on the shelf"),
    lib: Library = Depends(get_lib),
):
    with registry_lock:
        books = lib.get_books()
        return [BookModel(**b.to_dict()) for b in books if not available or b.is_available()]

@app.post("/books", response_model=BookModel, status_code=201, dependencies=[Depends(get_api_key)])
def add_book(payload: BookCreateModel, lib: Library = Depends(get_lib)):
    try:
        book = lib.librarian.create_book(payload.title, payload.author, payload.year, payload.amount)
    except InvalidArgumentError as e:
        raise HTTPException(status_code=400, detail=str(e))
    with registry_lock:
        lib.add_book(book)
        return BookModel(**book.to_dict())

@app.delete("/books", dependencies=[Depends(get_api_key)])
def delete_book(
    title: str = Query(..., description="Exact book title"),
    year: Optional[int] = Query(None, description="Publication year, to pick among equal titles"),
    lib: Library = Depends(get_lib),
):
    with registry_lock:
        book = lib.find_book(title, year)
        if book is None:
            raise HTTPException(status_code=404, detail="No such book exists!")
        lib.remove_book(book)
    return {"message": f"Book deleted: {title}"}

# --- Members ---
@app.get("/members", response_model=List[MemberModel])
def get_members(lib: Library = Depends(get_lib)):
    with registry_lock:
        return [MemberModel(**m.to_dict()) for m in lib.get_members()]

@app.post("/members", response_model=MemberModel, status_code=201, dependencies=[Depends(get_api_key)])
def add_member(payload: MemberCreateModel, lib: Library = Depends(get_lib)):
    try:
        member = lib.librarian.create_member(payload.name, payload.id)
        with registry_lock:
            lib.add_member(member)
    except InvalidArgumentError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except DuplicateMemberError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return MemberModel(**member.to_dict())

@app.delete("/members/{member_id}", dependencies=[Depends(get_api_key)])
def delete_member(member_id: int, lib: Library = Depends(get_lib)):
    with registry_lock:
        member = _member_or_404(lib, member_id)
        lib.remove_member(member)
    return {"message": f"Member removed: {member.name}"}

@app.get("/members/{member_id}/loans", response_model=List[LoanModel])
def get_member_loans(member_id: int, lib: Library = Depends(get_lib)):
    with registry_lock:
        member = _member_or_404(lib, member_id)
        return [LoanModel(**loan.to_dict()) for loan in member.loans]

# --- Loans ---
@app.get("/loans", response_model=List[LoanModel])
def get_loans(
    active: bool = Query(False, description="Only loans that are still outstanding"),
    lib: Library = Depends(get_lib),
):
    with registry_lock:
        loans = lib.get_loans()
        return [LoanModel(**loan.to_dict()) for loan in loans if not active or loan.is_active]

@app.post("/loans/borrow", response_model=LoanModel)
def borrow_book(payload: LoanRequestModel, lib: Library = Depends(get_lib)):
    with registry_lock:
        member = _member_or_404(lib, payload.member_id)
        book = lib.find_available_book(payload.title)
        if book is None:
            raise HTTPException(status_code=409, detail=LoanResult.BOOK_UNAVAILABLE.value)
        result = member.borrow_book(book)
        if not result:
            raise HTTPException(status_code=409, detail=result.value)
        return LoanModel(**member.loans[-1].to_dict())

@app.post("/loans/return", response_model=LoanModel)
def return_book(payload: LoanRequestModel, lib: Library = Depends(get_lib)):
    with registry_lock:
        member = _member_or_404(lib, payload.member_id)
        book = member.borrowed_book(payload.title)
        if book is None:
            raise HTTPException(status_code=409, detail=LoanResult.NO_MATCHING_LOAN.value)
        loan = next(l for l in member.loans if l.is_active and l.book is book)
        member.return_book(book)
        return LoanModel(**loan.to_dict())

# --- Login ---
@app.post("/login", response_model=UserModel)
def login(payload: LoginModel, lib: Library = Depends(get_lib)):
    """Tag the caller as librarian or member; unknown member IDs are registered."""
    try:
        with registry_lock:
            user = lib.login(payload.user_name, payload.user_id)
    except InvalidArgumentError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return UserModel(**user.to_dict())
