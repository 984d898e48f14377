import logging

from fastapi import FastAPI

from .logging_setup import setup_logging
from .settings import settings
from .routers import health
from .routers import speaking
from .routers import listen
from .routers import write
from .routers import results

app = FastAPI(title="Band Diagnostic Scoring API")
app.include_router(health.router)
app.include_router(speaking.router)
app.include_router(listen.router)
app.include_router(write.router)
app.include_router(results.router)


@app.get("/info")
def root():
	policy = settings.band_policy()
	return {
		"status": "ok",
		"diagnostic": policy.diagnostic,
		"ceiling": policy.ceiling,
		"rounding": policy.rounding,
	}


@app.on_event("startup")
async def startup_event():
	setup_logging(settings)
	logging.getLogger(__name__).info("scoring API ready")
