"""FastAPI application factory."""

import asyncio
from contextlib import asynccontextmanager

from fastapi import FastAPI

from config import load_config
from core.health import HealthChecker, check_event_loop, create_clock_check, create_entropy_check
from internal.logging import LogLevel, StructuredLogger
from textnonce import MonotonicClock, NonceGenerator, get_alphabet
from textnonce.clock import NANOS_PER_SECOND
from utils.crash import configure as configure_crash, create_async_handler
from ui.routes import health, nonce

VERSION = "1.0.0"


def create_app(config=None):
    """Create and configure the FastAPI application."""
    config = config or load_config()

    logger_instance = StructuredLogger.configure(min_level=LogLevel.parse(config.logging.level))

    nonce_config = config.nonce
    clock = MonotonicClock(rollback_warn_ns=int(nonce_config.rollback_warn_s * NANOS_PER_SECOND))
    generator = NonceGenerator(
        clock=clock,
        alphabet=get_alphabet(nonce_config.alphabet),
        default_length=nonce_config.default_length,
    )

    configure_crash(config.logging.crash_file, generator)

    health_checker = HealthChecker()
    health_checker.register("event_loop", check_event_loop, critical=True)
    health_checker.register("clock", create_clock_check(clock, nonce_config.rollback_warn_s), critical=False)
    health_checker.register("entropy", create_entropy_check(generator.random_bytes), critical=True)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger_instance.info("Application starting", version=VERSION,
                             alphabet=generator.alphabet.name, default_length=generator.default_length)
        loop = asyncio.get_running_loop()
        loop.set_exception_handler(create_async_handler(logger_instance))
        yield
        logger_instance.info("Application shutdown complete", issued=clock.issued)

    app = FastAPI(
        title="Text Nonce Service",
        version=VERSION,
        description="time-prefixed random nonces for session ids",
        lifespan=lifespan,
    )
    app.state.generator = generator

    # Initialize route modules with dependencies
    nonce.init(generator, nonce_config)
    health.init(generator, health_checker)

    app.include_router(nonce.router)
    app.include_router(health.router)

    return app
