import logging
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.responses import RedirectResponse

from author import Author
from config import settings
from controllers import author_controller, bookinstance_controller, catalog_controller
from database import get_database_file
from errors import CatalogError
from store import DocumentStore
from templates import render

logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)

# Built at import time so the tests can point LIBRARY_DB_FILE elsewhere and reload this module
store = DocumentStore(get_database_file())

app = FastAPI(title=settings.app_name, version=settings.app_version, debug=settings.debug)


async def _form(request: Request) -> dict:
    form = await request.form()
    return {key: value for key, value in form.items() if isinstance(value, str)}


# --- Error handling ---
@app.exception_handler(CatalogError)
async def catalog_error_handler(request: Request, exc: CatalogError):
    """Map NotFound to 404 and store failures to 500, rendered as the error page."""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message} {exc.metadata}")
    else:
        logger.warning(f"{request.method} {request.url.path}: {exc.message}")
    # Store details stay in the log
    message = "Internal server error" if exc.status_code >= 500 else exc.message
    return render("error", status_code=exc.status_code, title="Error",
                  message=message, status=exc.status_code)


# --- Health check ---
@app.get("/health")
async def health():
    """Lightweight health endpoint; touches the database with a count query."""
    db_ok = True
    try:
        author_count = await store.count(Author)
    except CatalogError:
        db_ok = False
        author_count = None
    return {
        "status": "healthy" if db_ok else "degraded",
        "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
        "db": db_ok,
        "total_authors": author_count,
    }


@app.get("/")
async def root():
    return RedirectResponse("/catalog", status_code=302)


@app.get("/catalog")
async def catalog_home():
    return await catalog_controller.catalog_index(store)


# --- Authors ---
@app.get("/catalog/authors")
async def author_list():
    return await author_controller.author_list(store)


@app.get("/catalog/authors/create")
async def author_create_get():
    return await author_controller.author_create_get()


@app.post("/catalog/authors/create")
async def author_create_post(request: Request):
    return await author_controller.author_create_post(store, await _form(request))


@app.get("/catalog/authors/{author_id}")
async def author_detail(author_id: str):
    return await author_controller.author_detail(store, author_id)


@app.get("/catalog/authors/{author_id}/delete")
async def author_delete_get(author_id: str):
    return await author_controller.author_delete_get(store, author_id)


@app.post("/catalog/authors/{author_id}/delete")
async def author_delete_post(author_id: str, request: Request):
    return await author_controller.author_delete_post(store, await _form(request))


@app.get("/catalog/authors/{author_id}/update")
async def author_update_get(author_id: str):
    return await author_controller.author_update_get(store, author_id)


@app.post("/catalog/authors/{author_id}/update")
async def author_update_post(author_id: str, request: Request):
    return await author_controller.author_update_post(store, author_id, await _form(request))


# --- Book instances ---
@app.get("/catalog/bookinstances")
async def bookinstance_list():
    return await bookinstance_controller.bookinstance_list(store)


@app.get("/catalog/bookinstances/create")
async def bookinstance_create_get():
    return await bookinstance_controller.bookinstance_create_get(store)


@app.post("/catalog/bookinstances/create")
async def bookinstance_create_post(request: Request):
    return await bookinstance_controller.bookinstance_create_post(store, await _form(request))


@app.get("/catalog/bookinstances/{instance_id}")
async def bookinstance_detail(instance_id: str):
    return await bookinstance_controller.bookinstance_detail(store, instance_id)


@app.get("/catalog/bookinstances/{instance_id}/delete")
async def bookinstance_delete_get(instance_id: str):
    return await bookinstance_controller.bookinstance_delete_get(store, instance_id)


@app.post("/catalog/bookinstances/{instance_id}/delete")
async def bookinstance_delete_post(instance_id: str, request: Request):
    return await bookinstance_controller.bookinstance_delete_post(store, await _form(request))


@app.get("/catalog/bookinstances/{instance_id}/update")
async def bookinstance_update_get(instance_id: str):
    return await bookinstance_controller.bookinstance_update_get(store, instance_id)


@app.post("/catalog/bookinstances/{instance_id}/update")
async def bookinstance_update_post(instance_id: str, request: Request):
    return await bookinstance_controller.bookinstance_update_post(store, instance_id, await _form(request))
