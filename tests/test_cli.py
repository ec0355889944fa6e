from pathlib import Path
import tempfile
from contextlib import redirect_stderr, redirect_stdout
import io
import unittest

from bfc import BrainfuckCompiler, CompilerOptions, ParseError
from bfc.cli import main as cli_main


class CompilerTests(unittest.TestCase):
    def test_compile_returns_code_and_extension(self) -> None:
        result = BrainfuckCompiler(CompilerOptions(pre=2, post=8)).compile("+[>.]")
        self.assertEqual(result.extension, "c")
        self.assertIn("static unsigned char cells[10] = {0};", result.code)
        self.assertIn("unsigned char *ptr = cells + 2;", result.code)

    def test_format_renders_ir(self) -> None:
        self.assertEqual(BrainfuckCompiler().format("+ # c # [ - ] ::x::"), "+[-]::x::")

    def test_parse_error_propagates(self) -> None:
        with self.assertRaises(ParseError) as ctx:
            BrainfuckCompiler().compile("[+")
        self.assertEqual(ctx.exception.remaining, "[+")

    def test_options_validation(self) -> None:
        with self.assertRaises(ValueError):
            CompilerOptions(pre=-1)
        with self.assertRaises(ValueError):
            CompilerOptions(pre=0, post=0)
        with self.assertRaises(ValueError):
            CompilerOptions(backend="x86")

    def test_options_coerce_backend_name(self) -> None:
        self.assertEqual(CompilerOptions(backend="c99").backend.value, "c99")


class CLITests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp_path = Path(self._tmp.name)

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def _write_source(self, content: str, name: str = "program.bf") -> Path:
        path = self.tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path

    def test_cli_prints_generated_code(self) -> None:
        source_path = self._write_source("+[.-]")
        buffer = io.StringIO()
        with redirect_stdout(buffer):
            exit_code = cli_main([str(source_path), "--post", "16"])
        self.assertEqual(exit_code, 0)
        expected = BrainfuckCompiler(CompilerOptions(post=16)).compile("+[.-]").code
        self.assertEqual(buffer.getvalue(), expected)

    def test_cli_emits_file(self) -> None:
        source_path = self._write_source(",.")
        output_path = self.tmp_path / "out.c"
        exit_code = cli_main([str(source_path), "--emit", str(output_path)])
        self.assertEqual(exit_code, 0)
        emitted = output_path.read_text(encoding="utf-8")
        self.assertIn("*ptr = getchar();", emitted)

    def test_cli_emit_directory_uses_extension(self) -> None:
        source_path = self._write_source(".", name="hello.bf")
        out_dir = self.tmp_path / "build"
        out_dir.mkdir()
        exit_code = cli_main([str(source_path), "-o", str(out_dir)])
        self.assertEqual(exit_code, 0)
        self.assertTrue((out_dir / "hello.c").exists())

    def test_cli_print_ir(self) -> None:
        source_path = self._write_source("> > # skip # [ - ]")
        buffer = io.StringIO()
        with redirect_stdout(buffer):
            exit_code = cli_main([str(source_path), "--print-ir"])
        self.assertEqual(exit_code, 0)
        self.assertEqual(buffer.getvalue(), ">>[-]\n")

    def test_cli_syntax_error(self) -> None:
        source_path = self._write_source("++$$")
        buffer = io.StringIO()
        with redirect_stderr(buffer):
            exit_code = cli_main([str(source_path)])
        self.assertEqual(exit_code, 1)
        self.assertIn("Syntax error", buffer.getvalue())
        self.assertIn("'$$'", buffer.getvalue())

    def test_cli_missing_file_errors(self) -> None:
        buffer = io.StringIO()
        with redirect_stderr(buffer):
            exit_code = cli_main(["does_not_exist.bf"])
        self.assertEqual(exit_code, 1)
        self.assertIn("Source file not found", buffer.getvalue())

    def test_cli_rejects_empty_tape(self) -> None:
        source_path = self._write_source("+")
        buffer = io.StringIO()
        with redirect_stderr(buffer):
            exit_code = cli_main([str(source_path), "--pre", "0", "--post", "0"])
        self.assertEqual(exit_code, 2)
        self.assertIn("Invalid options", buffer.getvalue())


if __name__ == "__main__":
    unittest.main()
