from fastapi import FastAPI

# Routers
from orgboard.api.routers.core import router as core_router
from orgboard.api.routers.boards import router as boards_router


app = FastAPI(title="Org Board Crawler", version="0.1")

app.include_router(core_router)
app.include_router(boards_router)
