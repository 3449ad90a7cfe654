# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
flowengine HTTP application.

    uvicorn flowengine.main:app
"""

from typing import Optional

from fastapi import FastAPI

from flowengine.api import executions_router
from flowengine.core.config import Config, get_config
from flowengine.core.logging import get_service_logger
from flowengine.executors import build_default_registry
from flowengine.persistence import PersistenceGateway, create_gateway
from flowengine.workflow.registry import ExecutorRegistry
from flowengine.workflow.runner import WorkflowRunner

logger = get_service_logger("app")


def create_app(
    config: Optional[Config] = None,
    gateway: Optional[PersistenceGateway] = None,
    registry: Optional[ExecutorRegistry] = None
) -> FastAPI:
    """Wire gateway, executor registry and runner into a FastAPI app"""
    config = config or get_config()
    gateway = gateway or create_gateway(config)
    registry = registry or build_default_registry()

    app = FastAPI(
        title="flowengine",
        description="Workflow execution engine",
        version="0.1.0",
    )

    # Runtime objects in app.state for dependency injection
    app.state.config = config
    app.state.gateway = gateway
    app.state.registry = registry
    app.state.runner = WorkflowRunner(gateway, registry, config)

    app.include_router(executions_router)

    @app.on_event("shutdown")
    async def close_gateway():
        await gateway.close()

    logger.info(f"flowengine ready: store={config.store_backend}, executors={list(registry.keys())}")
    return app


app = create_app()
