"""
Тесты для форматтеров логов.

Проверяем, что поля из extra={...} попадают в вывод
и что JSON-строка совпадает с форматом из документации.
"""

import json
import logging
from datetime import datetime

from juicebox.core.logging import JSONFormatter, SimpleFormatter, request_id_var


def _record(message: str, **extra) -> logging.LogRecord:
    logger = logging.getLogger("juicebox.services.post")
    return logger.makeRecord(
        logger.name, logging.INFO, __file__, 1, message, None, None, extra=extra
    )


def test_json_formatter_output():
    """Test: JSON запись содержит уровень, логгер, request_id и extra."""
    token = request_id_var.set("5b0f7c2e-8d3a-4e61-9f1c-2a7e4d9b6c13")
    try:
        line = JSONFormatter().format(_record("Post created", post_id=3, tag_count=2))
    finally:
        request_id_var.reset(token)

    data = json.loads(line)
    assert data["level"] == "INFO"
    assert data["logger"] == "juicebox.services.post"
    assert data["message"] == "Post created"
    assert data["request_id"] == "5b0f7c2e-8d3a-4e61-9f1c-2a7e4d9b6c13"
    assert data["extra"] == {"post_id": 3, "tag_count": 2}
    # isoformat() с часовым поясом UTC
    assert datetime.fromisoformat(data["timestamp"]).utcoffset().total_seconds() == 0


def test_json_formatter_without_request_id():
    """Test: вне HTTP запроса request_id и extra не выводятся."""
    data = json.loads(JSONFormatter().format(_record("Database tables created")))

    assert "request_id" not in data
    assert "extra" not in data


def test_simple_formatter_appends_extra():
    """Test: простой формат дописывает extra как key=value."""
    token = request_id_var.set("5b0f7c2e-8d3a-4e61-9f1c-2a7e4d9b6c13")
    try:
        line = SimpleFormatter().format(_record("Post created", post_id=3))
    finally:
        request_id_var.reset(token)

    assert "| INFO     | [5b0f7c2e] juicebox.services.post: Post created post_id=3" in line
