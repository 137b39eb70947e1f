"""Shared fixtures: an in-memory stand-in for the Supabase client."""

from datetime import date, datetime, timedelta
from types import SimpleNamespace

import pytest

from app.config import AppConfig, SupabaseConfig


class FakeAPIError(Exception):
    """Mimics postgrest's APIError, which carries a .message attribute."""

    def __init__(self, message, details=None):
        super().__init__(message)
        self.message = message
        self.details = details


class FakeResponse:
    def __init__(self, data):
        self.data = data


class FakeQuery:
    def __init__(self, client, table):
        self.client = client
        self.table = table
        self.op = None
        self.payload = None
        self.filters = []
        self.order_by = None

    def select(self, columns="*"):
        self.op = "select"
        return self

    def insert(self, payload):
        self.op = "insert"
        self.payload = payload
        return self

    def update(self, payload):
        self.op = "update"
        self.payload = payload
        return self

    def eq(self, column, value):
        self.filters.append((column, value))
        return self

    def order(self, column, desc=False):
        self.order_by = (column, desc)
        return self

    def _matches(self, row):
        return all(row.get(c) == v for c, v in self.filters)

    def execute(self):
        self.client.calls.append(self)
        if self.op in self.client.fail_ops:
            raise FakeAPIError(f"{self.op} failed", details="simulated")

        rows = self.client.rows.setdefault(self.table, [])
        if self.op == "select":
            result = [dict(r) for r in rows if self._matches(r)]
            if self.order_by:
                column, desc = self.order_by
                result.sort(key=lambda r: r.get(column) or "", reverse=desc)
            return FakeResponse(result)
        if self.op == "insert":
            self.client.next_id += 1
            row = {
                "id": f"id-{self.client.next_id}",
                "status": "Novo",
                "data_solicitacao": datetime.now().isoformat(),
                **self.payload,
            }
            rows.append(row)
            return FakeResponse([dict(row)])
        if self.op == "update":
            changed = []
            for row in rows:
                if self._matches(row):
                    row.update(self.payload)
                    changed.append(dict(row))
            return FakeResponse(changed)
        raise AssertionError(f"unexpected operation {self.op}")


class FakeBucket:
    def __init__(self, client, name):
        self.client = client
        self.name = name

    def upload(self, path, file, file_options=None):
        if self.client.fail_upload:
            raise FakeAPIError("upload failed")
        self.client.uploads.append((self.name, path, file, file_options))
        return SimpleNamespace(path=path)

    def get_public_url(self, path):
        return f"https://storage.test/{self.name}/{path}"


class FakeStorage:
    def __init__(self, client):
        self.client = client

    def from_(self, bucket):
        return FakeBucket(self.client, bucket)


class FakeAuth:
    def __init__(self, users):
        self.users = users
        self.signed_out = False

    def sign_in_with_password(self, credentials):
        email = credentials["email"]
        if self.users.get(email) != credentials["password"]:
            raise FakeAPIError("Invalid login credentials")
        return SimpleNamespace(
            user=SimpleNamespace(id="admin-1", email=email),
            session=SimpleNamespace(access_token="token"),
        )

    def sign_out(self):
        self.signed_out = True


class FakeSupabase:
    def __init__(self, rows=None):
        self.rows = rows if rows is not None else {}
        self.calls = []
        self.uploads = []
        self.fail_ops = set()
        self.fail_upload = False
        self.next_id = 0
        self.storage = FakeStorage(self)
        self.auth = FakeAuth({"admin@pezao.com": "segredo123"})

    def table(self, name):
        return FakeQuery(self, name)


class FakeUpload:
    """Same surface as Streamlit's UploadedFile."""

    def __init__(self, name, type, data=b"\x89PNG fake"):
        self.name = name
        self.type = type
        self._data = data

    def getvalue(self):
        return self._data


def booking_row(id, status="Novo", requested="2025-03-01T10:00:00", **extra):
    row = {
        "id": id,
        "nome_cliente": f"Cliente {id}",
        "telefone": "(14) 99999-0000",
        "endereco": "Rua das Flores, 10, Centro",
        "tipo_servico": "pintura",
        "data_preferencial": "2025-03-10T08:00:00",
        "descricao_problema": None,
        "url_foto": None,
        "status": status,
        "data_solicitacao": requested,
        "created_at": requested,
    }
    row.update(extra)
    return row


@pytest.fixture
def fake_client():
    return FakeSupabase()


@pytest.fixture
def seeded_client():
    return FakeSupabase(rows={"agendamentos": [
        booking_row("b1", "Novo", "2025-03-01T10:00:00"),
        booking_row("b2", "Em Andamento", "2025-03-03T09:30:00"),
        booking_row("b3", "Finalizado", "2025-03-02T15:45:00"),
    ]})


@pytest.fixture
def cfg():
    return AppConfig(supabase=SupabaseConfig(url="http://localhost:54321", anon_key="test-key"))


@pytest.fixture
def valid_values():
    return {
        "nome_cliente": "Maria Silva",
        "telefone": "(14) 99874-0000",
        "endereco": "Rua das Flores, 10, Centro",
        "tipo_servico": "reparo-eletrico",
        "data_preferencial": datetime.combine(date.today() + timedelta(days=2), datetime.min.time()),
        "descricao_problema": "Tomada da cozinha sem energia",
    }
