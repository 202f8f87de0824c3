from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware

from ebay_finding import FindingClient, FindingError, Operation, get_operation, serialize, validate
from ebay_finding.config import APP_ID
from ebay_finding.log import setup_logging
from ebay_finding.params import build_url

setup_logging()


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Shared client for the process; closed on shutdown.
    async with FindingClient() as client:
        app.state.client = client
        yield


app = FastAPI(lifespan=lifespan)

# Enable CORS for local development
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # In production, specify the exact origin
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _operation(name: str) -> Operation:
    try:
        return get_operation(name)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"unknown operation: {name}")


def _error(e: FindingError) -> HTTPException:
    return HTTPException(status_code=e.status_code, detail=e.to_dict())


@app.get("/query/{operation}")
async def query_endpoint(operation: str, request: Request):
    """Validate the query string as Finding parameters and show the outgoing request."""
    op = _operation(operation)
    try:
        finding_params = validate(op, dict(request.query_params))
    except FindingError as e:
        raise _error(e)
    # The app ID is left out of the preview.
    query = serialize(finding_params, "")
    return {
        "operation": op.name,
        "url": build_url(request.app.state.client.url, query),
        "params": [[name, value] for name, value in query if name != "SECURITY-APPNAME"],
    }


@app.get("/search/{operation}")
async def search_endpoint(operation: str, request: Request):
    op = _operation(operation)
    try:
        response = await request.app.state.client.find_items(op, dict(request.query_params))
    except FindingError as e:
        raise _error(e)
    return response.model_dump(by_alias=True, exclude_defaults=True)


@app.get("/")
async def root():
    return {"status": "eBay Finding API is running", "docs": "/docs", "app_id_configured": bool(APP_ID)}


@app.get("/health")
async def health_check():
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
