"""
FastAPI backend service for statement uploads.
"""
from datetime import date
from typing import Optional
import logging

from fastapi import APIRouter, Depends, FastAPI, File, HTTPException, Request, UploadFile
from fastapi.middleware.cors import CORSMiddleware

from statement_parser.config import Settings, load_settings
from statement_parser.core.runner import StatementParser
from statement_parser.errors import ExtractionError, PersistenceError, StatementParseError
from statement_parser.storage.repository import TransactionRepository

logger = logging.getLogger(__name__)

router = APIRouter()


def get_repository(request: Request) -> TransactionRepository:
    """Return the app's repository, creating the SQL one on first use."""
    repository = getattr(request.app.state, "repository", None)
    if repository is None:
        from statement_parser.storage.sql import SqlTransactionRepository

        settings: Settings = request.app.state.settings
        repository = SqlTransactionRepository(settings.database_url)
        repository.create_schema()
        request.app.state.repository = repository
        logger.info(f"Connected to {repository.engine.url.render_as_string(hide_password=True)}")
    return repository


@router.get("/")
def root():
    """Health check endpoint."""
    return {"message": "Card Statement Parser API", "status": "healthy"}


@router.post("/upload_statement")
def upload_statement(
    file: Optional[UploadFile] = File(None),
    repository: TransactionRepository = Depends(get_repository),
):
    """
    Parse an uploaded PDF statement and store its transactions.

    Args:
        file: Uploaded PDF statement (multipart part named "file")

    Returns:
        Period and stored transactions grouped by card number
    """
    if file is None or not file.filename:
        raise HTTPException(status_code=400, detail="No file was included in the upload.")

    logger.info(f"Processing statement: {file.filename}")
    try:
        result = StatementParser(repository).ingest_pdf(file.file.read())
    except (ExtractionError, StatementParseError) as e:
        logger.error(f"Rejected statement {file.filename}: {e}")
        raise HTTPException(status_code=422, detail=f"Failed to parse statement: {e}")
    except PersistenceError as e:
        logger.error(f"Error storing statement {file.filename}: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to store transactions: {e}")

    logger.info(f"Stored {len(result.transactions)} transactions from {file.filename}")

    return {
        "success": True,
        "filename": file.filename,
        "period": result.period.model_dump(mode="json"),
        "transactions": {
            card: [t.model_dump(mode="json") for t in txns]
            for card, txns in result.by_card().items()
        },
        "count": len(result.transactions),
    }


@router.get("/transactions")
def list_transactions(
    card_number: Optional[str] = None,
    start: Optional[date] = None,
    end: Optional[date] = None,
    repository: TransactionRepository = Depends(get_repository),
):
    """List stored transactions, optionally for one card and date range."""
    if (start is None) != (end is None):
        raise HTTPException(status_code=400, detail="start and end must be given together")
    if start is not None and card_number is None:
        raise HTTPException(status_code=400, detail="A date range requires card_number")

    try:
        if card_number is None:
            transactions = repository.all_transactions()
        elif start is None:
            transactions = repository.transactions_by_card(card_number)
        else:
            transactions = repository.transactions_by_card_and_range(card_number, start, end)
    except PersistenceError as e:
        logger.error(f"Error loading transactions: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to load transactions: {e}")

    return {
        "success": True,
        "transactions": [t.model_dump(mode="json") for t in transactions],
    }


def create_app(settings: Optional[Settings] = None,
               repository: Optional[TransactionRepository] = None) -> FastAPI:
    """Build the FastAPI application."""
    settings = settings or load_settings()
    logging.basicConfig(level=settings.log_level)

    app = FastAPI(title="Card Statement Parser", version="1.0.0")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["http://localhost:5173", "http://localhost:3000"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.state.settings = settings
    app.state.repository = repository
    app.include_router(router)
    return app


if __name__ == "__main__":
    import uvicorn

    settings = load_settings()
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)
