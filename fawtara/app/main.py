from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from fawtara.app.api.v1.api import api_router
from fawtara.app.core.config import settings
from fawtara.app.middleware.language import LanguageMiddleware

app = FastAPI(title="Fawtara Invoice Documents")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST"],
    allow_headers=["Authorization", "Content-Type", "Accept", "Accept-Language"],
    expose_headers=["Content-Disposition", "X-Invoice-Template"],
)
app.add_middleware(LanguageMiddleware)

app.include_router(api_router)
