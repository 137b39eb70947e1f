from app.booking_flow import validate_booking_form
from app.logging_config import configure_logging, get_logger
from db.models import (
    DEFAULT_STATUS,
    RELATIONSHIPS,
    STATUS_OPTIONS,
    TABLE_SHAPES,
    TABLES,
    AgendamentoInsert,
    AgendamentoRow,
    BookingInsert,
    ProfileInsert,
    service_label,
)


def test_status_options_in_workflow_order():
    assert STATUS_OPTIONS == ["Novo", "Confirmado", "Em Andamento", "Finalizado", "Cancelado"]
    assert DEFAULT_STATUS == "Novo"


def test_service_label_falls_back_to_raw_value():
    assert service_label("montagem-moveis") == "Montagem de Móveis"
    assert service_label("Encanamento") == "Encanamento"
    assert service_label(None) == ""


def test_insert_payload_matches_table_shape(valid_values):
    request, _ = validate_booking_form(valid_values)
    payload = request.to_insert()
    assert AgendamentoInsert.__required_keys__ <= set(payload)
    assert set(payload) <= set(AgendamentoInsert.__annotations__)
    assert set(payload) <= set(AgendamentoRow.__annotations__)


def test_remote_schema_covered():
    assert set(TABLES) == {
        "agendamentos", "bookings", "properties", "property_availability",
        "addresses", "orders", "profiles",
    }
    assert set(TABLE_SHAPES) == set(TABLES)
    for (table, _), (ref_table, _) in RELATIONSHIPS.items():
        assert table in TABLES
        assert ref_table in TABLES


def test_every_table_has_row_insert_update():
    for table, (row, insert, update) in TABLE_SHAPES.items():
        assert TABLES[table] is row
        columns = set(row.__annotations__)
        # every shape describes the same columns
        assert set(insert.__annotations__) == columns, table
        assert set(update.__annotations__) == columns, table
        assert row.__required_keys__ == columns, table
        assert update.__required_keys__ == frozenset(), table
        # generated or defaulted columns are optional on insert
        assert "id" in insert.__optional_keys__, table


def test_insert_required_columns():
    assert BookingInsert.__required_keys__ == {
        "property_id", "guest_id", "guest_name", "guest_email", "guest_phone",
        "check_in_date", "check_out_date", "total_nights", "total_amount",
    }
    assert ProfileInsert.__required_keys__ == {"user_id"}
    assert "status" in AgendamentoInsert.__optional_keys__


def test_logging_configuration_is_idempotent():
    configure_logging("DEBUG")
    configure_logging("INFO", json_logs=True)
    get_logger("tests").info("configured", check=True)
