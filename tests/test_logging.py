"""
Logging service tests.
"""
import json
import logging

from bookshelf.services.system.logger_service import (
    ConsoleFormatter,
    JSONFormatter,
    LoggerService,
    get_logger,
    log_entity_operation,
    log_error,
)


def _record(name="bookshelf.services.store.memory_store", msg="Entity stored", **extra):
    record = logging.LogRecord(name, logging.INFO, __file__, 10, msg, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_includes_extra_fields():
    payload = json.loads(JSONFormatter().format(_record(collection="books", entity_id="42")))

    assert payload['message'] == "Entity stored"
    assert payload['level'] == "INFO"
    assert payload['component'] == "store"
    assert payload['collection'] == "books"
    assert payload['entity_id'] == "42"


def test_json_formatter_stringifies_unserializable_values():
    marker = object()
    payload = json.loads(JSONFormatter().format(_record(marker=marker)))

    assert payload['marker'] == str(marker)


def test_console_formatter_appends_context():
    line = ConsoleFormatter().format(_record(collection="books"))

    assert "[bookshelf.services.store.memory_store] Entity stored" in line
    assert "collection=books" in line


def test_log_entity_operation(caplog):
    logger = get_logger("bookshelf.tests")
    caplog.set_level(logging.INFO)

    log_entity_operation(logger, 'updated', 'books::abc', collection='books', entity_id='abc')

    record = caplog.records[0]
    assert record.getMessage() == "Entity books::abc was updated"
    assert record.operation == 'updated'
    assert record.collection == 'books'
    assert record.entity_id == 'abc'


def test_repository_logs_reference_it_builds(book_repository, dune, caplog):
    caplog.set_level(logging.INFO)
    created = book_repository.persist(dune)

    record = next(r for r in caplog.records if getattr(r, 'operation', None) == 'inserted')
    assert record.getMessage() == f"Entity {book_repository.collection_reference(created.id)} was inserted"
    assert record.collection == 'books'
    assert record.entity_id == created.id


def test_initialization_leaves_third_party_loggers_alone(monkeypatch):
    monkeypatch.setenv('LOG_TO_FILE', 'false')
    google_logger = logging.getLogger('google')
    previous = google_logger.level
    google_logger.setLevel(logging.DEBUG)
    try:
        LoggerService()._initialize_logging()
        assert google_logger.level == logging.DEBUG
    finally:
        google_logger.setLevel(previous)


def test_log_error_attaches_traceback(caplog):
    logger = get_logger("bookshelf.tests")
    caplog.set_level(logging.ERROR)

    try:
        raise ValueError("boom")
    except ValueError as e:
        log_error(logger, e, {"collection": "books"})

    record = caplog.records[-1]
    assert record.error_type == "ValueError"
    assert record.collection == "books"
    assert record.exc_info is not None
