import os
from datetime import date
from typing import List, Optional
from fastapi import Depends, FastAPI, File, Form, Request, UploadFile
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

import cities
from config import get_settings
from contacts import check_contacts
from database import ProjectStore, get_store
from errors import NotFoundError, ProjectBoardError, StorageError, ValidationError
from export import projects_to_csv
from logging_config import LoggingConfig
from projects import ImageUpload, ProjectForm, create_project, delete_project
from schemas import CityValidation, ContactBundle, ContactCheck, DeleteResult, Project
from uploads import REFERENCE_PREFIX, ImageStorage, get_images

LoggingConfig.configure()
logger = LoggingConfig.get_logger(__name__)

settings = get_settings()

app = FastAPI(title=settings.app_name)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Ошибки отдаются в едином формате {"error": "..."}

@app.exception_handler(ProjectBoardError)
async def project_board_error_handler(request: Request, exc: ProjectBoardError):
    if exc.status_code >= 500:
        logger.error("%s %s: %s", request.method, request.url.path, exc.message)
    else:
        logger.info("%s %s отклонен: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    message = "Маршрут не найден" if exc.status_code == 404 else str(exc.detail)
    return JSONResponse(status_code=exc.status_code, content={"error": message})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in exc.errors())
    return JSONResponse(status_code=400, content={"error": f"Некорректный запрос: {fields}"})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Необработанная ошибка в %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content={"error": "Внутренняя ошибка сервера. Пожалуйста, попробуйте позже."},
    )


@app.get("/")
def read_root():
    return {"message": f"{settings.app_name} running", "environment": settings.app_env}


@app.get("/uploads/{name}")
def get_upload(name: str, images: ImageStorage = Depends(get_images)):
    path = images.path_for(REFERENCE_PREFIX + name)
    if path is None or not path.is_file():
        raise NotFoundError("Файл не найден")
    return FileResponse(path)


# Проекты

@app.get("/api/projects", response_model=List[Project])
def list_projects(store: ProjectStore = Depends(get_store)):
    result = store.load_all()
    if not result.ok:
        raise StorageError("Ошибка сервера при получении проектов")
    return result.records


@app.get("/api/projects/date/{day}", response_model=List[Project])
def projects_by_date(day: str, store: ProjectStore = Depends(get_store)):
    try:
        parsed = date.fromisoformat(day)
    except ValueError:
        raise ValidationError("Некорректная дата. Формат: YYYY-MM-DD")
    return store.find_by_creation_date(parsed)


@app.get("/api/projects/{project_id}", response_model=Project)
def get_project(project_id: str, store: ProjectStore = Depends(get_store)):
    project = store.find_by_id(project_id)
    if project is None:
        raise NotFoundError("Проект не найден")
    return project


@app.post("/api/projects", response_model=Project, status_code=201)
def post_project(
    title: Optional[str] = Form(None),
    tagline: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    city: Optional[str] = Form(None),
    price: Optional[str] = Form(None),
    contact: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None),
    store: ProjectStore = Depends(get_store),
    images: ImageStorage = Depends(get_images),
):
    form = ProjectForm(
        title=title, tagline=tagline, description=description,
        city=city, price=price, contact=contact,
    )
    upload = None
    if image is not None and image.filename:
        upload = ImageUpload(filename=image.filename, content_type=image.content_type, stream=image.file)
    return create_project(store, images, form, upload)


@app.delete("/api/projects/{project_id}", response_model=DeleteResult)
def remove_project(
    project_id: str,
    store: ProjectStore = Depends(get_store),
    images: ImageStorage = Depends(get_images),
):
    delete_project(store, images, project_id)
    return DeleteResult(message="Проект успешно удален", deleted_id=project_id)


# Города

@app.get("/api/cities", response_model=List[str])
def search_cities(query: Optional[str] = None):
    return cities.search(query)


@app.get("/api/cities/popular", response_model=List[str])
def popular_cities():
    return cities.popular_cities()


@app.get("/api/cities/validate/{city}", response_model=CityValidation)
def validate_city(city: str):
    valid = cities.is_valid(city)
    return CityValidation(
        city=city,
        is_valid=valid,
        suggestion=None if valid else cities.suggest(city),
    )


# Контакты: та же проверка, что и при создании проекта

@app.post("/api/contacts/validate", response_model=ContactCheck)
def validate_contacts(bundle: ContactBundle):
    return check_contacts(bundle)


@app.get("/api/export/csv")
def export_csv(store: ProjectStore = Depends(get_store)):
    result = store.load_all()
    if not result.ok:
        raise StorageError("Ошибка сервера при экспорте проектов")
    return Response(
        content=projects_to_csv(result.records),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": "attachment; filename=projects.csv"},
    )


if __name__ == "__main__":
    import uvicorn
    port = int(os.getenv("PORT", settings.api_port))
    uvicorn.run(app, host=settings.api_host, port=port)
