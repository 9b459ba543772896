# api/deps.py
from fastapi import Request

from taskapi.db import Database, TaskRepository


def get_app_settings(request: Request):
    return request.app.state.settings


def get_database(request: Request) -> Database:
    return request.app.state.db


def get_task_repository(request: Request) -> TaskRepository:
    return TaskRepository(get_database(request))
