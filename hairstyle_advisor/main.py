from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from hairstyle_advisor.config import logger

from .routers import router

# Initialize FastAPI application
app = FastAPI(
    title="Hairstyle Advisor API",
    description="Face shape analysis and AI-generated hairstyle suggestions",
    version="1.0.0",
)

app.include_router(router)


# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # TODO: restrict to the mobile client origins before release
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


logger.info("Hairstyle Advisor API initialized successfully")
