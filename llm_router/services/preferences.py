"""User preference storage supporting DynamoDB (production) and memory (development)."""

import asyncio
from typing import Any, Protocol

from llm_router.config import Settings
from llm_router.core.errors import StorageError
from llm_router.core.logging import get_logger
from llm_router.models.schemas import UserPreference

logger = get_logger(__name__)


class PreferenceStore(Protocol):
    async def save(self, preference: UserPreference) -> None:
        ...

    async def get_latest(self, user_id: str) -> UserPreference | None:
        ...


class InMemoryPreferenceStore:
    """Process-local store for development and tests."""

    def __init__(self):
        self._items: dict[str, list[UserPreference]] = {}

    async def save(self, preference: UserPreference) -> None:
        self._items.setdefault(preference.user_id, []).append(preference)

    async def get_latest(self, user_id: str) -> UserPreference | None:
        entries = self._items.get(user_id)
        if not entries:
            return None
        return max(entries, key=lambda p: p.timestamp)


class DynamoPreferenceStore:
    """DynamoDB table keyed by ``userId`` (partition) and ``timestamp`` (sort)."""

    def __init__(self, table_name: str, region_name: str | None = None, table: Any = None):
        self.table_name = table_name
        self.region_name = region_name
        self._table = table

    @property
    def table(self):
        """Lazy initialization of the DynamoDB table resource."""
        if self._table is None:
            if not self.table_name:
                raise StorageError("DYNAMODB_TABLE is not configured")
            try:
                import boto3

                self._table = boto3.resource(
                    "dynamodb", region_name=self.region_name
                ).Table(self.table_name)
            except Exception as e:
                logger.error("dynamodb_client_init_failed", error=str(e))
                raise StorageError(f"Failed to initialize DynamoDB: {e}") from e
        return self._table

    async def save(self, preference: UserPreference) -> None:
        item = {
            "userId": preference.user_id,
            "timestamp": preference.timestamp,
            "defaultModel": preference.default_model.value,
        }
        try:
            await asyncio.to_thread(self.table.put_item, Item=item)
        except StorageError:
            raise
        except Exception as e:
            logger.error("dynamodb_save_failed", user_id=preference.user_id, error=str(e))
            raise StorageError("Failed to save user preferences") from e

    async def get_latest(self, user_id: str) -> UserPreference | None:
        try:
            result = await asyncio.to_thread(
                self.table.query,
                KeyConditionExpression="userId = :userId",
                ExpressionAttributeValues={":userId": user_id},
                ScanIndexForward=False,  # Most recent first
                Limit=1,
            )
        except StorageError:
            raise
        except Exception as e:
            logger.error("dynamodb_get_failed", user_id=user_id, error=str(e))
            raise StorageError("Failed to get user preferences") from e

        items = result.get("Items") or []
        if not items:
            return None

        item = items[0]
        try:
            return UserPreference(
                user_id=item["userId"],
                default_model=item["defaultModel"],
                timestamp=int(item["timestamp"]),
            )
        except (KeyError, ValueError) as e:
            logger.error("dynamodb_item_malformed", user_id=user_id, error=str(e))
            raise StorageError("Stored user preferences are malformed") from e


def build_preference_store(settings: Settings) -> PreferenceStore:
    if settings.preferences_backend == "memory":
        logger.info("preferences_backend", backend="memory")
        return InMemoryPreferenceStore()
    logger.info("preferences_backend", backend="dynamodb", table=settings.dynamodb_table)
    return DynamoPreferenceStore(settings.dynamodb_table, region_name=settings.aws_region)
