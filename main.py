from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from tasklane.core.config import settings
from tasklane.core.exceptions import TasklaneError
from tasklane.core.logging import configure_logging
from tasklane.core.scheduler import start_scheduler, stop_scheduler
from tasklane.endpoints import activity, comment, notification, role, task, user, workspace
from tasklane.middleware.exceptions import (
    global_exception_handler, http_exception_handler, tasklane_exception_handler, validation_exception_handler
)
from tasklane.middleware.logging import RequestLoggingMiddleware

configure_logging()

app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    openapi_url=f"{settings.API_V1_STR}/openapi.json"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)

app.add_middleware(GZipMiddleware, minimum_size=1000)
app.add_middleware(RequestLoggingMiddleware)

app.add_exception_handler(Exception, global_exception_handler)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(TasklaneError, tasklane_exception_handler)

app.include_router(user.router, prefix="/users", tags=["Users"])
app.include_router(workspace.router, prefix="/workspaces", tags=["Workspaces"])
app.include_router(role.router, prefix="/workspaces/{workspace_id}/roles", tags=["Roles"])
app.include_router(task.router, prefix="/tasks", tags=["Tasks"])
app.include_router(comment.router, prefix="/comments", tags=["Comments"])
app.include_router(activity.router, prefix="/activities", tags=["Activities"])
app.include_router(notification.router, prefix="/notifications", tags=["Notifications"])

@app.on_event("startup")
async def startup_event():
    start_scheduler()

@app.on_event("shutdown")
async def shutdown_event():
    stop_scheduler()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
