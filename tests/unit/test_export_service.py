"""Unit tests for the Excel, CSV and PDF report exports."""

import csv
import io
from datetime import datetime, timedelta, timezone

import fitz
import pytest
from openpyxl import load_workbook

from client_roster.application.services import export_to_csv, export_to_excel, export_to_pdf
from client_roster.application.services.export_service import CSV_COLUMNS
from client_roster.domain.entities import Client

NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


def make_clients(count: int = 3) -> list[Client]:
    clients = []
    for i in range(count):
        pulled = i % 3 != 2
        clients.append(
            Client(
                id=i + 1,
                client_name=f"Client, {i:03d}",
                domain_url=f"https://client{i}.example.com",
                client_id=f"cid-{i}",
                latest_pull_date=NOW - timedelta(days=i) if pulled else None,
                latest_pull_by="jane" if pulled else None,
                gsos_version=f"4.{i % 2}" if pulled else None,
                created_at=datetime(2026, 1, 2, tzinfo=timezone.utc),
                updated_at=datetime(2026, 3, 4, tzinfo=timezone.utc),
            )
        )
    return clients


def read_csv_rows(content: bytes) -> list[dict[str, str]]:
    lines = [
        line
        for line in content.decode("utf-8").splitlines()
        if line and not line.startswith("#")
    ]
    return list(csv.DictReader(lines))


def test_csv_round_trips_client_fields():
    clients = make_clients(5)
    artifact = export_to_csv(clients, filename="roster", now=NOW)

    assert artifact.filename == "roster.csv"
    assert artifact.media_type.startswith("text/csv")

    rows = read_csv_rows(artifact.content)
    assert len(rows) == len(clients)
    assert list(rows[0].keys()) == CSV_COLUMNS
    for row, client in zip(rows, clients):
        assert row["Client Name"] == client.client_name
        assert row["Domain URL"] == client.domain_url
        assert row["Client ID"] == client.client_id
        assert row["Created Date"] == "2026-01-02"
        assert row["Last Updated"] == "2026-03-04"


def test_csv_placeholders_for_missing_values():
    rows = read_csv_rows(export_to_csv(make_clients(3), now=NOW).content)
    never_pulled = rows[2]
    assert never_pulled["Latest Pull Date"] == "Never"
    assert never_pulled["Latest Pull By"] == "N/A"
    assert never_pulled["GSOS Version"] == "N/A"
    assert rows[0]["Latest Pull Date"] == "2026-10-19"


def test_csv_metadata_header():
    text = export_to_csv(make_clients(3), now=NOW).content.decode("utf-8")
    lines = text.splitlines()
    assert lines[0] == "# GSOS Client Management Report"
    assert lines[1] == "# Generated on: 2026-10-19 12:00:00 UTC"
    assert "# Total Clients: 3" in lines
    assert "# Clients with Pull History: 2" in lines


def test_excel_workbook_sheets():
    artifact = export_to_excel(make_clients(4), filename="roster", now=NOW)
    assert artifact.filename == "roster.xlsx"

    workbook = load_workbook(io.BytesIO(artifact.content))
    assert workbook.sheetnames == ["Client Data", "Summary", "Version Breakdown"]

    data = list(workbook["Client Data"].iter_rows(values_only=True))
    assert len(data) == 5
    assert data[1][0] == "Client, 000"

    summary = {row[0]: row[1] for row in workbook["Summary"].iter_rows(min_row=2, values_only=True)}
    assert summary["Total Clients"] == 4
    assert summary["Clients with Pull History"] == 3

    versions = dict(workbook["Version Breakdown"].iter_rows(min_row=2, values_only=True))
    assert versions == {"4.1": 2, "4.0": 1, "No Version": 1}


@pytest.mark.parametrize("count", [0, 5])
def test_pdf_single_page_for_small_rosters(count):
    artifact = export_to_pdf(make_clients(count), now=NOW)
    assert artifact.media_type == "application/pdf"
    assert artifact.content.startswith(b"%PDF")

    with fitz.open(stream=artifact.content, filetype="pdf") as doc:
        assert doc.page_count == 1
        text = doc[0].get_text()
    assert "GSOS CLIENT MANAGEMENT REPORT" in text
    assert "Page 1 of 1" in text


def test_pdf_paginates_long_rosters():
    artifact = export_to_pdf(make_clients(120), filename="big", now=NOW)
    assert artifact.filename == "big.pdf"

    with fitz.open(stream=artifact.content, filetype="pdf") as doc:
        page_count = doc.page_count
        last_text = doc[page_count - 1].get_text()
    assert page_count > 1
    assert f"Page {page_count} of {page_count}" in last_text
    assert "Client Name" in last_text


def test_csv_keeps_rows_whose_name_starts_with_comment_marker():
    clients = make_clients(2)
    clients[0].client_name = "#1 Priority"

    rows = read_csv_rows(export_to_csv(clients, now=NOW).content)

    assert [r["Client Name"] for r in rows] == ["#1 Priority", "Client, 001"]


def test_excel_drops_control_characters():
    clients = make_clients(1)
    clients[0].client_name = "Acme\x01"
    clients[0].gsos_version = "4.2\x07"

    workbook = load_workbook(io.BytesIO(export_to_excel(clients, now=NOW).content))

    assert workbook["Client Data"]["A2"].value == "Acme"
    assert workbook["Version Breakdown"]["A2"].value == "4.2"
