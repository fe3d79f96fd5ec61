"""FastAPI app with Strawberry GraphQL."""

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request
from strawberry.fastapi import GraphQLRouter

from calculation.config import CalculationConfig
from calculation.runner import CalculationRunner

from app.observability import setup_observability
from app.schema import schema

config = CalculationConfig.from_env()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    # one runner (and thread pool) for the lifetime of the app
    with CalculationRunner(config=config) as runner:
        app.state.runner = runner
        yield


async def get_context(request: Request) -> dict:
    return {"runner": request.app.state.runner}


app = FastAPI(title="Calculation API", version="0.1.0", lifespan=lifespan)
setup_observability(app, config.log_level)
graphql_app = GraphQLRouter(schema, context_getter=get_context)
app.include_router(graphql_app, prefix="/graphql")


@app.get("/health")
def health() -> dict[str, str]:
    """Health check for load balancers and Docker."""
    return {"status": "ok"}
