from fastapi import Request

from skill_exchange.config import Settings, get_settings


def get_app_settings(request: Request) -> Settings:
    # Apps built with explicit settings (tests, scripts) keep them on app.state.
    return getattr(request.app.state, "settings", None) or get_settings()
