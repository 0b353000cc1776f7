from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from api.adapters_routes import router as adapters_routes
from api.directions_routes import router as directions_routes
from api.dispatch_routes import router as dispatch_routes
from api.status import router as status_router
from config import settings
from core.load_plugins import load_plugins
from contextlib import asynccontextmanager


@asynccontextmanager
async def lifespan(app: FastAPI):
    load_plugins()
    yield


app = FastAPI(title="Taxi Route Backend", lifespan=lifespan)

# CORS (adjust for your frontend)
origins = settings.CORS_ALLOW_ORIGINS.split(",")
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register API routes
app.include_router(adapters_routes)
app.include_router(directions_routes)
app.include_router(dispatch_routes)
app.include_router(status_router)

if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="127.0.0.1", port=8000, reload=True)
