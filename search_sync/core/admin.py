"""Администрирование индекса и маппинга типа.

Классы:
    IndexAdministrator
        Создание индекса, чтение/запись/удаление маппинга, rebuild.
"""

from typing import Any, Mapping, Optional

from elasticsearch import Elasticsearch

from search_sync.core.params import build_basic_params
from search_sync.domain import DeleteOutcome, IndexBinding, SearchParams
from search_sync.utils.logger import get_logger

logger = get_logger(__name__)

HTTP_NOT_FOUND = 404


def response_status(response: Any) -> int:
    """HTTP-статус ответа клиента (200, если клиент его не сообщает)."""
    meta = getattr(response, "meta", None)
    status = getattr(meta, "status", None)
    return status if isinstance(status, int) else 200


def response_body(response: Any) -> Mapping[str, Any]:
    """Тело ответа клиента в виде словаря."""
    body = getattr(response, "body", response)
    return body if isinstance(body, Mapping) else {}


class IndexAdministrator:
    """Управляет физическим индексом и маппингом типа модели.

    Тип модели живёт в собственном индексе (SearchParams.target), поэтому
    удаление маппинга: это удаление индекса типа.

    Attributes:
        client: Клиент Elasticsearch.
        binding: Привязка модели к индексу.
    """

    def __init__(self, client: Elasticsearch, binding: IndexBinding):
        self.client = client
        self.binding = binding
        self.log = logger.bind(index=binding.index_name, doc_type=binding.type_name)

    def params(self) -> SearchParams:
        return build_basic_params(self.binding.index_name, self.binding.type_name)

    # === Index ===

    def index_exists(self) -> bool:
        return bool(self.client.indices.exists(index=self.params().target))

    def create_index(
        self, shards: Optional[int] = None, replicas: Optional[int] = None
    ) -> Any:
        """Создаёт индекс типа.

        Args:
            shards: number_of_shards (только если задано и не 0).
            replicas: number_of_replicas (только если задано и не 0).

        Returns:
            Ответ indices.create.
        """
        settings: dict[str, Any] = {}
        if shards:
            settings["number_of_shards"] = shards
        if replicas:
            settings["number_of_replicas"] = replicas

        request: dict[str, Any] = {"index": self.params().target}
        if settings:
            request["settings"] = settings

        self.log.info("Creating index", target=request["index"], **settings)
        return self.client.indices.create(**request)

    def create_index_if_not_exists(
        self, shards: Optional[int] = None, replicas: Optional[int] = None
    ) -> Any:
        """Создаёт индекс, если его нет.

        Между проверкой и созданием нет защиты от гонки.

        Returns:
            Ответ indices.create или None, если индекс уже был.
        """
        if not self.index_exists():
            return self.create_index(shards, replicas)
        return None

    # === Mapping ===

    def get_mapping(self) -> Mapping[str, Any]:
        """Маппинг типа: {"<target>": {"mappings": {...}}}."""
        response = self.client.indices.get_mapping(index=self.params().target)
        return response_body(response)

    def mapping_exists(self) -> bool:
        """Есть ли у типа непустой маппинг.

        Сначала проверяется существование индекса, поэтому отсутствие
        индекса даёт False, а не NotFoundError.
        """
        if not self.index_exists():
            return False

        target = self.params().target
        mappings = self.get_mapping().get(target, {}).get("mappings", {})
        return bool(mappings)

    def type_exists(self) -> bool:
        """Тип существует, если у него есть маппинг."""
        return self.mapping_exists()

    def put_mapping(self) -> Any:
        """Записывает маппинг из binding.mapping_properties как есть."""
        body = {
            "_source": {"enabled": True},
            "properties": self.binding.get_mapping_properties(),
        }
        self.log.info("Putting mapping", fields=len(body["properties"]))
        self.log.trace("Mapping body", body=body)
        return self.client.indices.put_mapping(index=self.params().target, body=body)

    def delete_mapping(self, ignore_missing: bool = False) -> DeleteOutcome:
        """Удаляет маппинг типа (вместе с индексом типа).

        Args:
            ignore_missing: Вернуть NOT_FOUND вместо NotFoundError.

        Returns:
            DeleteOutcome.DELETED или DeleteOutcome.NOT_FOUND.
        """
        target = self.params().target
        self.log.info("Deleting mapping", target=target)

        if not ignore_missing:
            self.client.indices.delete(index=target)
            return DeleteOutcome.DELETED

        response = self.client.options(ignore_status=HTTP_NOT_FOUND).indices.delete(
            index=target
        )
        if response_status(response) == HTTP_NOT_FOUND:
            self.log.info("Mapping already absent", target=target)
            return DeleteOutcome.NOT_FOUND
        return DeleteOutcome.DELETED

    def rebuild_mapping(
        self, shards: Optional[int] = None, replicas: Optional[int] = None
    ) -> Any:
        """Пересоздаёт маппинг типа.

        Последовательность: удалить существующий маппинг (404: штатно),
        создать индекс при необходимости, записать маппинг заново.
        Последовательность не атомарна: сбой посередине оставляет индекс
        без маппинга, повторный вызов это исправляет.

        Returns:
            Ответ indices.put_mapping.
        """
        if self.mapping_exists():
            self.delete_mapping(ignore_missing=True)

        self.create_index_if_not_exists(shards, replicas)

        # Конфликтов быть не может: прежний маппинг только что удалён
        return self.put_mapping()
