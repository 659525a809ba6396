import logging
from datetime import timedelta

from fastapi import APIRouter, Depends, FastAPI, Request, Response, Security
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

import accounts
import chat
from completion import CompletionClient
from config import settings
from database import Base, SessionLocal, engine
from errors import AuthenticationRequired, ChatBackendError
from schemas import (
    ChatRequest,
    ChatResponse,
    Credentials,
    HistoryResponse,
    LoginResponse,
    RefreshRequest,
    RefreshResponse,
    RegisterResponse,
)
from security import TokenIssuer
from store import CredentialStore

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

# Create tables
Base.metadata.create_all(bind=engine)

app = FastAPI(title="Chat Log API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

token_issuer = TokenIssuer(
    settings.SECRET_KEY,
    algorithm=settings.ALGORITHM,
    access_ttl=timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
)

completion_client = CompletionClient(
    api_key=settings.COMPLETION_API_KEY,
    base_url=settings.COMPLETION_API_URL,
    model=settings.COMPLETION_MODEL,
    timeout=settings.COMPLETION_TIMEOUT_SECONDS,
)


@app.exception_handler(ChatBackendError)
async def chat_backend_error_handler(request: Request, exc: ChatBackendError):
    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message}, headers=headers)


# DB dependency
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_store(db: Session = Depends(get_db)) -> CredentialStore:
    return CredentialStore(db)


def get_token_issuer() -> TokenIssuer:
    return token_issuer


def get_completion_client() -> CompletionClient:
    return completion_client


security = HTTPBearer(auto_error=False)


def get_current_email(
    credentials: HTTPAuthorizationCredentials = Security(security),
    issuer: TokenIssuer = Depends(get_token_issuer),
) -> str:
    """Resolve the bearer token to the email it was issued for."""
    if credentials is None:
        raise AuthenticationRequired()
    return issuer.validate_access_token(credentials.credentials)


router = APIRouter()


@router.get("/")
def root():
    return {"status": "ok", "message": "Chat log backend is running"}


@router.post("/auth/register", response_model=RegisterResponse)
def register(data: Credentials, store: CredentialStore = Depends(get_store)):
    return accounts.register(store, data.email, data.password)


@router.post("/auth/login", response_model=LoginResponse)
def login(
    data: Credentials,
    store: CredentialStore = Depends(get_store),
    issuer: TokenIssuer = Depends(get_token_issuer),
):
    return accounts.login(
        store,
        issuer,
        data.email,
        data.password,
        refresh_ttl=timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS),
    )


@router.post("/auth/refresh", response_model=RefreshResponse)
def refresh(
    data: RefreshRequest,
    store: CredentialStore = Depends(get_store),
    issuer: TokenIssuer = Depends(get_token_issuer),
):
    return accounts.refresh(store, issuer, data.refresh_token)


@router.post("/chat", response_model=ChatResponse)
def send_message(
    data: ChatRequest,
    email: str = Depends(get_current_email),
    store: CredentialStore = Depends(get_store),
    completion: CompletionClient = Depends(get_completion_client),
):
    return chat.send_message(store, completion, email, data.prompt)


@router.get("/chat/history", response_model=HistoryResponse)
def get_history(email: str = Depends(get_current_email), store: CredentialStore = Depends(get_store)):
    return chat.get_history(store, email)


@router.delete("/chat/history", status_code=204)
def clear_history(email: str = Depends(get_current_email), store: CredentialStore = Depends(get_store)):
    chat.clear_history(store, email)
    return Response(status_code=204)


app.include_router(router, prefix=settings.API_PREFIX)
