from __future__ import annotations

import unittest
from unittest import mock

from fastapi.testclient import TestClient

from bfc import BrainfuckCompiler, CompilerOptions
from bfc.webui import create_app
from bfc.webui import __main__ as server


class CompileApiTests(unittest.TestCase):
    def setUp(self) -> None:
        self.client = TestClient(create_app())

    def test_compile_returns_generated_code(self) -> None:
        response = self.client.post("/api/compile", json={"source": "+[>.]", "pre": 1, "post": 9})
        self.assertEqual(response.status_code, 200, response.text)
        payload = response.json()
        expected = BrainfuckCompiler(CompilerOptions(pre=1, post=9)).compile("+[>.]")
        self.assertEqual(payload["code"], expected.code)
        self.assertEqual(payload["extension"], "c")
        self.assertEqual(payload["backend"], "c99")
        self.assertEqual(payload["statement_count"], 4)

    def test_compile_defaults(self) -> None:
        response = self.client.post("/api/compile", json={"source": ""})
        self.assertEqual(response.status_code, 200, response.text)
        self.assertIn("cells[30000]", response.json()["code"])

    def test_compile_syntax_error_reports_remainder(self) -> None:
        response = self.client.post("/api/compile", json={"source": "++$$"})
        self.assertEqual(response.status_code, 422, response.text)
        detail = response.json()["detail"]
        self.assertEqual(detail["remaining"], "$$")
        self.assertEqual(detail["position"], 2)
        self.assertEqual(detail["line"], 1)
        self.assertEqual(detail["column"], 3)

    def test_compile_rejects_negative_sizes(self) -> None:
        response = self.client.post("/api/compile", json={"source": "+", "pre": -1})
        self.assertEqual(response.status_code, 422, response.text)

    def test_compile_rejects_empty_tape(self) -> None:
        response = self.client.post("/api/compile", json={"source": "+", "pre": 0, "post": 0})
        self.assertEqual(response.status_code, 422, response.text)

    def test_compile_rejects_unknown_backend(self) -> None:
        response = self.client.post("/api/compile", json={"source": "+", "backend": "x86"})
        self.assertEqual(response.status_code, 422, response.text)

    def test_backend_name_is_case_insensitive(self) -> None:
        response = self.client.post("/api/compile", json={"source": "+", "backend": "C99"})
        self.assertEqual(response.status_code, 200, response.text)
        self.assertEqual(response.json()["backend"], "c99")

    def test_format_source(self) -> None:
        response = self.client.post("/api/format", json={"source": "# hi # + [ - ] ::mov::"})
        self.assertEqual(response.status_code, 200, response.text)
        self.assertEqual(response.json()["formatted"], "+[-]::mov::")

    def test_format_syntax_error(self) -> None:
        response = self.client.post("/api/format", json={"source": "[+"})
        self.assertEqual(response.status_code, 422, response.text)
        self.assertEqual(response.json()["detail"]["remaining"], "[+")

    def test_list_backends(self) -> None:
        response = self.client.get("/api/backends")
        self.assertEqual(response.status_code, 200, response.text)
        self.assertEqual(response.json(), {"backends": [{"name": "c99", "extension": "c"}]})


class ServerEntryPointTests(unittest.TestCase):
    def test_main_runs_uvicorn_with_options(self) -> None:
        with mock.patch.object(server.uvicorn, "run") as run:
            exit_code = server.main(["--host", "0.0.0.0", "--port", "9000", "--log-level", "debug"])
        self.assertEqual(exit_code, 0)
        run.assert_called_once()
        _, kwargs = run.call_args
        self.assertEqual(kwargs, {"host": "0.0.0.0", "port": 9000, "log_level": "debug"})


if __name__ == "__main__":
    unittest.main()
