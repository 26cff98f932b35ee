from fastapi import Request

from calendar_api.scheduling.engine import SchedulingEngine


def get_engine(request: Request) -> SchedulingEngine:
    return request.app.state.engine
