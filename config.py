"""
Project: Restaurant Ordering Storefront & Back Office
Date: October 2026

Description:
Application settings. Values come from the environment (optionally a .env
file next to this module) and are loaded into Flask via from_object.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

BASE_DIR = Path(__file__).resolve().parent
load_dotenv(dotenv_path=BASE_DIR / ".env")


def _get_env(*keys, default=None):
    for k in keys:
        v = os.getenv(k)
        if v is not None and str(v).strip() != "":
            return v.strip()
    return default


class Config:
    SECRET_KEY = _get_env("SECRET_KEY", default="dev-secret-change-me")
    SQLALCHEMY_DATABASE_URI = _get_env("DATABASE_URL", default="sqlite:///storefront.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # back office gate: one static credential, hashed at start-up
    ADMIN_USERNAME = _get_env("ADMIN_USERNAME", default="admin")
    ADMIN_PASSWORD = _get_env("ADMIN_PASSWORD", default="admin123")

    BUSINESS_NAME = _get_env("BUSINESS_NAME", default="Pedi2")
    WHATSAPP_NUMBER = _get_env("WHATSAPP_NUMBER", default="5493517716373")
    TRANSFER_ALIAS = _get_env("TRANSFER_ALIAS", default="PEDI2.EXPRESS")
    CURRENCY_SYMBOL = _get_env("CURRENCY_SYMBOL", default="$")

    SOCKETIO_ASYNC_MODE = _get_env("SOCKETIO_ASYNC_MODE", default="threading")
    LOG_LEVEL = _get_env("LOG_LEVEL", default="INFO")
