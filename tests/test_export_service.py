import csv
import io

from models.inventory import Component
from services.export_service import INVENTORY_COLUMNS, ExportService


def _rows(buffer):
    return list(csv.reader(io.StringIO(buffer.getvalue().decode("utf-8"))))


def test_header_order():
    rows = _rows(ExportService().export_inventory_csv([]))
    assert rows[0] == ["Name", "Category", "Quantity", "Unit Price", "Total Value", "Min Stock", "Status"]
    assert rows[0] == INVENTORY_COLUMNS
    assert len(rows) == 1


def test_status_and_money_formatting():
    components = [
        Component("Arduino Uno R3", 8, 22.0, min_stock=15, category="Boards"),
        Component("Jumper wires", 50, 0.5, min_stock=20, category="Cables"),
        Component("Servo", 5, 12.5, min_stock=5),
    ]
    rows = _rows(ExportService().export_inventory_csv(components))

    assert rows[1] == ["Arduino Uno R3", "Boards", "8", "22.00", "176.00", "15", "Low Stock"]
    assert rows[2] == ["Jumper wires", "Cables", "50", "0.50", "25.00", "20", "OK"]
    # quantity equal to the minimum is not low
    assert rows[3][-1] == "OK"
    assert rows[3][2:5] == ["5", "12.50", "62.50"]


def test_names_with_commas_are_quoted():
    buffer = ExportService().export_inventory_csv([Component("Resistor 10k, 1/4W", 100, 0.02)])
    text = buffer.getvalue().decode("utf-8")
    assert '"Resistor 10k, 1/4W"' in text
    assert _rows(buffer)[1][0] == "Resistor 10k, 1/4W"


def test_buffer_is_rewound():
    buffer = ExportService().export_inventory_csv([Component("LED", 3, 1.0)])
    assert buffer.tell() == 0
    assert buffer.read().startswith(b"Name,Category")
