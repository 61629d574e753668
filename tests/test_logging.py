"""
Tests para el sistema de logging estructurado.
"""
import json

from reclamos.core.logger import StructuredLogger, get_logger


def test_logger_creation():
    """Test: Crear logger estructurado."""
    logger = get_logger("test.logger")

    assert logger is not None
    assert isinstance(logger, StructuredLogger)


def test_info_logging(tmp_path):
    """Test: Log nivel INFO."""
    log_file = tmp_path / "test.log"
    logger = StructuredLogger("test", log_file)

    logger.info("Caso creado", case_id="CASO-20240601-001", action="case_create")

    with open(log_file, encoding="utf-8") as f:
        log_data = json.loads(f.read())

    assert log_data["level"] == "INFO"
    assert log_data["message"] == "Caso creado"
    assert log_data["case_id"] == "CASO-20240601-001"
    assert log_data["action"] == "case_create"
    assert "timestamp" in log_data


def test_error_logging(tmp_path):
    """Test: Log nivel ERROR con excepción."""
    log_file = tmp_path / "test.log"
    logger = StructuredLogger("test", log_file)

    logger.error("Fallo enviando email", action="send_email", error=OSError("timeout"))

    with open(log_file, encoding="utf-8") as f:
        log_data = json.loads(f.read())

    assert log_data["level"] == "ERROR"
    assert log_data["error_type"] == "OSError"
    assert log_data["error_message"] == "timeout"
    assert "case_id" not in log_data


def test_extra_fields(tmp_path):
    """Test: Campos extras en logs."""
    log_file = tmp_path / "test.log"
    logger = StructuredLogger("test", log_file)

    logger.info("Duplicados eliminados", action="dedupe", removed=["CASO-1"], total=3)

    with open(log_file, encoding="utf-8") as f:
        log_data = json.loads(f.read())

    assert log_data["removed"] == ["CASO-1"]
    assert log_data["total"] == 3


def test_debug_filtrado_por_nivel(tmp_path):
    log_file = tmp_path / "test.log"
    logger = StructuredLogger("test.level", log_file, level="INFO")

    logger.debug("no se escribe")

    assert log_file.read_text(encoding="utf-8") == ""


def test_debug_logging(tmp_path):
    log_file = tmp_path / "test.log"
    logger = StructuredLogger("test.debug", log_file, level="DEBUG")

    logger.debug("Alertas calculadas", case_id="CASO-20240601-001", action="alerts", total=3)

    with open(log_file, encoding="utf-8") as f:
        log_data = json.loads(f.read())

    assert log_data["level"] == "DEBUG"
    assert log_data["total"] == 3
    assert log_data["logger"] == "test.debug"
