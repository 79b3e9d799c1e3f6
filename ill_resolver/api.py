from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import ORJSONResponse

from . import __version__
from .resolver import resolve_identifier
from .schemas import ResolveRequest, ResolveResponse

app = FastAPI(title="ILL Resolver API", version=__version__, default_response_class=ORJSONResponse)

app.add_middleware(
	CORSMiddleware,
	allow_origins=["*"],
	allow_credentials=True,
	allow_methods=["*"],
	allow_headers=["*"],
)


@app.get("/healthz")
async def healthz() -> dict:
	return {"status": "ok", "version": __version__}


@app.post("/resolve", response_model=ResolveResponse)
async def resolve_endpoint(req: ResolveRequest) -> ResolveResponse:
	return await resolve_identifier(request_type=req.request_type, identifier=req.identifier)
