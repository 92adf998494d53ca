"""
Environment bootloader.

Used by:
1. Application startup (main.py) -> mode="critical"
2. CI pipelines -> mode="dry-run"
3. Smoke tests (manual) -> mode="full" (CLI)
"""

import asyncio
import os
import smtplib
import sys
import time
from dataclasses import dataclass
from enum import Enum

import redis.asyncio as aioredis
from redis.exceptions import RedisError
from sqlalchemy import text
from sqlalchemy.ext.asyncio import create_async_engine

from restaurant_api.config import settings
from restaurant_api.logger import get_logger

logger = get_logger(__name__)

_DEV_SECRET_KEY = "dev_secret_key_change_in_prod"


class BootMode(str, Enum):
    CRITICAL = "critical"  # DB only (fast fail for startup)
    FULL = "full"  # DB + SMTP + Redis (smoke tests)
    DRY_RUN = "dry-run"  # Static config check only (CI lint)


@dataclass
class ServiceStatus:
    service: str
    status: str  # 'ok', 'warning', 'error', 'skipped'
    message: str
    duration_ms: float = 0.0


class Bootloader:
    """Handles environment validation and service connectivity checks."""

    @staticmethod
    async def validate(mode: BootMode = BootMode.CRITICAL) -> bool:
        """Run validation checks. Returns True if passed, False if failed.

        If mode is CRITICAL, this may call sys.exit(1) on failure.
        """
        logger.info("Bootloader starting validation", mode=mode.value)

        if not Bootloader._check_static_config():
            if mode == BootMode.CRITICAL:
                logger.critical("Static configuration check failed. Refusing to start.")
                sys.exit(1)
            return False

        if mode == BootMode.DRY_RUN:
            print("Dry-run configuration check passed.")
            return True

        results = [await Bootloader._check_database()]
        if mode == BootMode.FULL:
            results.append(await Bootloader._check_smtp())
            results.append(await Bootloader._check_redis())

        passed = True
        for res in results:
            if res.status == "error":
                passed = False
                logger.error(
                    "Service check failed",
                    service=res.service,
                    error=res.message,
                    duration_ms=res.duration_ms,
                )
            elif res.status == "warning":
                logger.warning(
                    "Service check warning",
                    service=res.service,
                    message=res.message,
                    duration_ms=res.duration_ms,
                )
            else:
                logger.info(
                    "Service check passed",
                    service=res.service,
                    status=res.status,
                    duration_ms=res.duration_ms,
                )

        if not passed:
            if mode == BootMode.CRITICAL:
                logger.critical("Critical service checks failed. Application cannot start.")
                sys.exit(1)
            return False

        logger.info("Bootloader validation successful")
        return True

    @staticmethod
    def print_config() -> None:
        """Print loaded configuration if DEBUG is enabled."""
        if os.getenv("DEBUG", "").lower() not in ("true", "1", "yes"):
            return

        safe_fields = [
            "debug",
            "environment",
            "smtp_host",
            "smtp_port",
            "currency_label",
            "report_scheduler_enabled",
            "public_menu_url",
        ]
        sensitive_fields = ["database_url", "secret_key", "smtp_user", "smtp_password", "redis_url"]

        print("\n" + "=" * 60)
        print("Config loaded (DEBUG mode)")
        print("=" * 60)
        for field in safe_fields:
            print(f"  {field}: {getattr(settings, field, None)}")
        print("")
        for field in sensitive_fields:
            print(f"  {field}: {'set' if getattr(settings, field, None) else 'not set'}")
        print("=" * 60 + "\n")

    @staticmethod
    def _check_static_config() -> bool:
        """Verify required settings; production must not run on the dev secret."""
        if not settings.database_url:
            logger.error("Configuration load failed", error="DATABASE_URL is empty")
            return False
        if settings.environment == "production" and settings.secret_key == _DEV_SECRET_KEY:
            logger.error("Configuration load failed", error="SECRET_KEY uses the development default")
            return False
        return True

    @staticmethod
    async def _check_database() -> ServiceStatus:
        """Verify database connectivity (SELECT 1)."""
        start = time.perf_counter()
        engine = None
        try:
            engine = create_async_engine(settings.database_url, echo=False)
            async with engine.connect() as conn:
                await conn.execute(text("SELECT 1"))

            duration_ms = (time.perf_counter() - start) * 1000
            return ServiceStatus("database", "ok", "Connection successful", duration_ms)
        except Exception as e:
            duration_ms = (time.perf_counter() - start) * 1000
            return ServiceStatus("database", "error", str(e), duration_ms)
        finally:
            if engine:
                await engine.dispose()

    @staticmethod
    async def _check_smtp() -> ServiceStatus:
        """Connect and EHLO; login only when credentials are configured."""
        if not settings.smtp_host:
            return ServiceStatus("smtp", "skipped", "Not configured")

        def _handshake() -> None:
            with smtplib.SMTP(settings.smtp_host, settings.smtp_port, timeout=10) as server:
                server.ehlo()
                if settings.smtp_use_tls:
                    server.starttls()
                    server.ehlo()
                if settings.smtp_user and settings.smtp_password:
                    server.login(settings.smtp_user, settings.smtp_password)

        start = time.perf_counter()
        try:
            await asyncio.to_thread(_handshake)
            duration_ms = (time.perf_counter() - start) * 1000
            return ServiceStatus("smtp", "ok", "Handshake successful", duration_ms)
        except (smtplib.SMTPException, OSError) as e:
            duration_ms = (time.perf_counter() - start) * 1000
            # Reports can still be viewed without mail
            return ServiceStatus("smtp", "warning", str(e), duration_ms)

    @staticmethod
    async def _check_redis() -> ServiceStatus:
        if not settings.redis_url:
            return ServiceStatus("redis", "skipped", "Not configured")

        start = time.perf_counter()
        try:
            client = aioredis.from_url(settings.redis_url, decode_responses=True)
            await client.ping()
            await client.aclose()
            duration_ms = (time.perf_counter() - start) * 1000
            return ServiceStatus("redis", "ok", "Ping successful", duration_ms)
        except (RedisError, OSError) as e:
            duration_ms = (time.perf_counter() - start) * 1000
            # Rate limiting falls back to in-process counters
            return ServiceStatus("redis", "warning", str(e), duration_ms)


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser()
    parser.add_argument("--mode", type=str, default="full", choices=["critical", "full", "dry-run"])
    args = parser.parse_args()

    print(f"Bootloader: Running validation cycle (mode={args.mode})")

    try:
        success = asyncio.run(Bootloader.validate(BootMode(args.mode)))
    except KeyboardInterrupt:
        print("\nAborted.")
        sys.exit(130)

    if success:
        print("Validation check passed.")
        sys.exit(0)
    else:
        print("Validation check failed.")
        sys.exit(1)
