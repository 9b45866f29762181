import logging

import uvicorn
from fastapi import FastAPI, HTTPException

from vitebridge.dependencies import (
    config,
    create_template_service,
    dev_server_service,
    vite_manifest_service,
)
from vitebridge.exceptions.app_exception_handler import (
    general_exception_handler,
    http_exception_handler,
)
from vitebridge.routers.assets_router import AssetsRouter
from vitebridge.routers.main import MainRouter

logger = logging.getLogger(__name__)


def run_app() -> FastAPI:
    loglevel = logging.getLevelName(
        config.get("app", "loglevel", fallback="debug").upper()
    )
    if isinstance(loglevel, str):
        raise ValueError(f"Invalid loglevel {loglevel.upper()}")

    logging.basicConfig(level=loglevel, datefmt="%m/%d/%Y %I:%M:%S %p")

    if dev_server_service.probe_activate():
        logger.info("Serving assets from the Vite dev server")
    else:
        logger.info("Serving assets from the production build")

    template_service = create_template_service(
        config, vite_manifest_service, dev_server_service
    )

    fastapi = FastAPI(docs_url=None, redoc_url=None)
    fastapi.include_router(MainRouter(template_service).get_main_router())
    fastapi.include_router(
        AssetsRouter(dev_server_service, vite_manifest_service).get_assets_router()
    )
    fastapi.add_exception_handler(Exception, general_exception_handler)
    fastapi.add_exception_handler(HTTPException, http_exception_handler)
    return fastapi


def kwargs_from_config() -> dict:
    return {
        "host": config.get("uvicorn", "host", fallback="127.0.0.1"),
        "port": config.getint("uvicorn", "port", fallback=8000),
        "reload": config.getboolean("uvicorn", "reload", fallback=False),
        "workers": config.getint("uvicorn", "workers", fallback=1),
        "factory": True,
    }


if __name__ == "__main__":
    uvicorn.run("vitebridge.main:run_app", **kwargs_from_config())
