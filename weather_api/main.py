from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.httpsredirect import HTTPSRedirectMiddleware

from weather_api.config import settings
from weather_api.api.routes import forecast, health

app = FastAPI(
    title=settings.APP_NAME,
    version=settings.VERSION,
    description="Sample weather forecast API"
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS.split(","),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

if settings.HTTPS_REDIRECT:
    app.add_middleware(HTTPSRedirectMiddleware)

# Routes
app.include_router(forecast.router)
app.include_router(health.router)


def run():
    import uvicorn
    uvicorn.run("weather_api.main:app", host=settings.HOST, port=settings.PORT, reload=settings.DEBUG)


if __name__ == "__main__":
    run()
