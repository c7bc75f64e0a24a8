# src/todo_ledger/api/app.py

"""
HTTP API over the task ledger.

    GET    /api/health                 - health check
    GET    /api/wallet/connect         - account the server acts as
    GET    /api/accounts               - configured demo accounts
    GET    /api/tasks                  - active tasks of the caller
    GET    /api/tasks/{id}             - one task of the caller
    POST   /api/tasks                  - add task {description}
    PUT    /api/tasks/{id}             - edit task {description}
    PATCH  /api/tasks/{id}/toggle      - toggle completion
    DELETE /api/tasks/{id}             - soft delete
    GET    /api/stats/count            - total / active / completed / deleted
    GET    /api/users/{address}/tasks  - public read of any account

The caller is the X-Account header when present, else the configured default account.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime

from fastapi import APIRouter, Depends, FastAPI, Header, HTTPException, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..core.accounts import is_valid_address
from ..core.state import AppState
from ..tasks.task_errors import InvalidInput, InvalidState, LedgerError, NotFound
from ..tasks.task_models import Task

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")


# --- Request / Response Models ---

class TaskBody(BaseModel):
    description: str | None = None


class TaskOut(BaseModel):
    id: int
    description: str
    completed: bool
    deleted: bool
    timestamp: int

    @classmethod
    def from_task(cls, task: Task) -> "TaskOut":
        return cls(
            id=task.id,
            description=task.description,
            completed=task.completed,
            deleted=task.deleted,
            timestamp=task.timestamp,
        )


class TaskListResponse(BaseModel):
    success: bool = True
    account: str
    tasks: list[TaskOut]
    count: int


class TaskResponse(BaseModel):
    success: bool = True
    task: TaskOut


class MutationResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    task_id: int = Field(alias="taskId")
    message: str


class StatsOut(BaseModel):
    total: int
    active: int
    completed: int
    deleted: int


class StatsResponse(BaseModel):
    success: bool = True
    account: str
    stats: StatsOut


class UserTasksResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    user_address: str = Field(alias="userAddress")
    tasks: list[TaskOut]
    count: int


# --- Dependencies ---

def get_state(request: Request) -> AppState:
    return request.app.state.app_state


def get_caller(
    state: AppState = Depends(get_state),
    x_account: str | None = Header(default=None),
) -> str:
    """Caller identity belongs to the HTTP layer; the ledger never guesses it."""
    if x_account is not None and x_account.strip():
        if not is_valid_address(x_account):
            raise HTTPException(400, "Invalid account address")
        return x_account.strip()

    account = getattr(state.settings, "default_account", "") or ""
    if not account:
        raise HTTPException(400, "No accounts available")
    return account


def _parse_task_id(raw: str) -> int:
    try:
        return int(raw)
    except ValueError:
        raise HTTPException(400, "Invalid task ID") from None


def _now_iso() -> str:
    return datetime.now(UTC).isoformat()


# --- Endpoints ---

@router.get("/health", response_model=None)
def health(state: AppState = Depends(get_state)):
    try:
        accounts_seen = state.task_store.count_accounts()
    except Exception:
        logger.exception("Health check: ledger store unavailable")
        return JSONResponse(
            status_code=500,
            content={"status": "unhealthy", "error": "Ledger store unavailable", "timestamp": _now_iso()},
        )
    return {
        "status": "healthy",
        "ledgerReady": True,
        "accountsAvailable": len(getattr(state.settings, "accounts", []) or []),
        "accountsWithTasks": accounts_seen,
        "timestamp": _now_iso(),
    }


@router.get("/wallet/connect")
def wallet_connect(caller: str = Depends(get_caller)) -> dict:
    return {"connected": True, "account": caller, "timestamp": _now_iso()}


@router.get("/accounts")
def list_accounts(state: AppState = Depends(get_state)) -> dict:
    return {
        "success": True,
        "accounts": list(getattr(state.settings, "accounts", []) or []),
        "default": getattr(state.settings, "default_account", ""),
    }


@router.get("/tasks", response_model=TaskListResponse)
def get_tasks(
    state: AppState = Depends(get_state),
    caller: str = Depends(get_caller),
) -> TaskListResponse:
    tasks = [TaskOut.from_task(t) for t in state.ledger.get_active_tasks(caller)]
    return TaskListResponse(account=caller, tasks=tasks, count=len(tasks))


@router.get("/tasks/{task_id}", response_model=TaskResponse)
def get_task(
    task_id: str,
    state: AppState = Depends(get_state),
    caller: str = Depends(get_caller),
) -> TaskResponse:
    task = state.ledger.get_task(caller, _parse_task_id(task_id))
    return TaskResponse(task=TaskOut.from_task(task))


@router.post("/tasks", response_model=MutationResponse, status_code=201)
def add_task(
    body: TaskBody,
    state: AppState = Depends(get_state),
    caller: str = Depends(get_caller),
) -> MutationResponse:
    task_id = state.ledger.add_task(caller, body.description or "")
    return MutationResponse(task_id=task_id, message="Task added successfully")


@router.put("/tasks/{task_id}", response_model=MutationResponse)
def edit_task(
    task_id: str,
    body: TaskBody,
    state: AppState = Depends(get_state),
    caller: str = Depends(get_caller),
) -> MutationResponse:
    tid = _parse_task_id(task_id)
    state.ledger.edit_task(caller, tid, body.description or "")
    return MutationResponse(task_id=tid, message="Task updated successfully")


@router.patch("/tasks/{task_id}/toggle", response_model=MutationResponse)
def toggle_task(
    task_id: str,
    state: AppState = Depends(get_state),
    caller: str = Depends(get_caller),
) -> MutationResponse:
    tid = _parse_task_id(task_id)
    state.ledger.toggle_task_status(caller, tid)
    return MutationResponse(task_id=tid, message="Task status toggled successfully")


@router.delete("/tasks/{task_id}", response_model=MutationResponse)
def delete_task(
    task_id: str,
    state: AppState = Depends(get_state),
    caller: str = Depends(get_caller),
) -> MutationResponse:
    tid = _parse_task_id(task_id)
    state.ledger.soft_delete_task(caller, tid)
    return MutationResponse(task_id=tid, message="Task deleted successfully")


@router.get("/stats/count", response_model=StatsResponse)
def get_stats(
    state: AppState = Depends(get_state),
    caller: str = Depends(get_caller),
) -> StatsResponse:
    stats = state.ledger.get_stats(caller)
    return StatsResponse(
        account=caller,
        stats=StatsOut(
            total=stats.total,
            active=stats.active,
            completed=stats.completed,
            deleted=stats.deleted,
        ),
    )


@router.get("/users/{address}/tasks", response_model=UserTasksResponse)
def get_user_tasks(address: str, state: AppState = Depends(get_state)) -> UserTasksResponse:
    if not is_valid_address(address):
        raise HTTPException(400, "Invalid account address")
    tasks = [TaskOut.from_task(t) for t in state.ledger.get_user_tasks(address)]
    return UserTasksResponse(user_address=address, tasks=tasks, count=len(tasks))


# --- Error mapping ---

_LEDGER_STATUS: dict[type[LedgerError], int] = {
    InvalidInput: 400,
    NotFound: 404,
    InvalidState: 409,
}


async def _ledger_error_handler(request: Request, exc: LedgerError) -> JSONResponse:
    status = _LEDGER_STATUS.get(type(exc), 400)
    logger.info("%s %s rejected (%s): %s", request.method, request.url.path, status, exc)
    return JSONResponse(status_code=status, content={"success": False, "error": str(exc)})


async def _http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    content: dict = {"success": False, "error": exc.detail}
    if exc.status_code == 404 and exc.detail == "Not Found":
        content = {"success": False, "error": "Route not found", "path": request.url.path}
    return JSONResponse(status_code=exc.status_code, content=content)


async def _validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content={"success": False, "error": "Invalid request", "details": jsonable_encoder(exc.errors())},
    )


async def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content={"success": False, "error": "Internal server error"},
    )


def create_app(state: AppState) -> FastAPI:
    app = FastAPI(title="todo-ledger", version="1.0.0")
    app.state.app_state = state

    @app.middleware("http")
    async def _log_requests(request: Request, call_next):
        logger.debug("%s %s", request.method, request.url.path)
        return await call_next(request)

    app.include_router(router)
    app.add_exception_handler(LedgerError, _ledger_error_handler)
    app.add_exception_handler(StarletteHTTPException, _http_error_handler)
    app.add_exception_handler(RequestValidationError, _validation_error_handler)
    app.add_exception_handler(Exception, _unhandled_error_handler)
    return app
