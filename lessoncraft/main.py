from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from lessoncraft.api import routes_auth, lesson_plan
from lessoncraft.core.config import CORS_ORIGINS

app = FastAPI(title="LessonCraft")

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["Content-Disposition"],
)

# Routers
app.include_router(routes_auth.router)
app.include_router(lesson_plan.router, prefix="/api", tags=["lesson_plan"])


@app.get("/")
def read_root():
    return {"message": "LessonCraft API is running"}
