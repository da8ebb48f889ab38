# ENV vars like the OpenRouter API key
import os
from dotenv import load_dotenv

load_dotenv(".env")
load_dotenv("backend/.env")


def first_non_empty_env(*keys: str) -> str:
    for key in keys:
        value = os.getenv(key, "").strip()
        if value:
            return value
    return ""


def _port(value: str) -> int:
    return int(value.lstrip(":") or "5000")


class Config:
    OPENROUTER_API_KEY = first_non_empty_env("OPENROUTER_API_KEY", "OPENROUTER_API")
    OPENROUTER_MODEL = first_non_empty_env("OPENROUTER_MODEL") or "deepseek/deepseek-chat-v3-0324"
    OPENROUTER_URL = first_non_empty_env("OPENROUTER_URL") or "https://openrouter.ai/api/v1/chat/completions"
    OPENROUTER_SITE_URL = first_non_empty_env("OPENROUTER_SITE_URL", "OPENROUTER_HTTP_REFERER")
    OPENROUTER_APP_NAME = first_non_empty_env("OPENROUTER_APP_NAME", "OPENROUTER_X_TITLE")
    OPENROUTER_TIMEOUT = float(first_non_empty_env("OPENROUTER_TIMEOUT") or 60)

    HOST = first_non_empty_env("HOST") or "0.0.0.0"
    PORT = _port(first_non_empty_env("PORT"))
    BACKEND_URL = first_non_empty_env("BACKEND_URL") or "http://localhost:5000"
    CORS_ORIGINS = [
        origin.strip()
        for origin in (first_non_empty_env("CORS_ORIGINS") or
                       "http://localhost:5173,http://127.0.0.1:5173,"
                       "http://localhost:5174,http://127.0.0.1:5174").split(",")
        if origin.strip()
    ]

    DEBUG = os.getenv("DEBUG", "false").lower() == "true"
    LOG_LEVEL = "DEBUG" if DEBUG else (first_non_empty_env("LOG_LEVEL") or "INFO").upper()
    LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
