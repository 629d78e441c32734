"""Вспомогательные утилиты search_sync.

Пакеты:
    logger
        Структурированное логирование с контекстом индекса и документа.
"""
