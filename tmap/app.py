from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from tmap.config import Config
from tmap.routers.edge_type_router import router as edge_type_router
from tmap.services.edge_type_service import EdgeTypeService
from tmap.services.record_store import RecordStore


logger = logging.getLogger(__name__)


def create_app(config: Config | None = None) -> FastAPI:
    cfg = config or Config()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if not cfg.SEED_BUILTIN_TYPES:
            logger.info("Skipping builtin edge type seeding (SEED_BUILTIN_TYPES unset).")
            yield
            return
        app.state.edge_types.seed_builtin_defaults()
        yield

    app = FastAPI(title="TiddlyMap Edge Types", lifespan=lifespan)

    app.state.config = cfg
    app.state.store = RecordStore(db_path=cfg.RECORD_DB_PATH, author=cfg.AUTHOR)
    app.state.edge_types = EdgeTypeService(app.state.store, cfg.namespace())

    app.include_router(edge_type_router)

    return app
