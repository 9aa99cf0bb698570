import io

import pytest

import console
from bmp_image import RGB, BMPImage
from tests.bmp_factory import make_bmp, solid_bmp


def run(*args, answers=()):
    out = io.StringIO()
    prompts = []
    replies = iter(answers)

    def ask(prompt):
        prompts.append(prompt)
        return next(replies)

    status = console.run(*args, out=out, ask=ask)
    return status, out.getvalue(), prompts


@pytest.fixture
def black_bmp(tmp_path):
    path = tmp_path / "in.bmp"
    path.write_bytes(solid_bmp(3, 3, color=(0, 0, 0)))
    return path


def test_draws_diagonals_and_saves(tmp_path, black_bmp):
    target = tmp_path / "out.bmp"
    status, text, prompts = run(str(black_bmp), str(target))

    assert status == 0
    assert prompts == []
    before = "* * * \n" * 3
    after = "  *   \n*   * \n  *   \n"
    assert text == "\n" + before + "\n" + after + "\n"

    image = BMPImage.load(target)
    assert image.get_pixel(0, 0) == RGB.splat(255)
    assert image.get_pixel(1, 0) == RGB(0, 0, 0)


def test_prompts_for_paths(tmp_path, black_bmp):
    target = tmp_path / "out.bmp"
    status, _, prompts = run(answers=[str(black_bmp), str(target)])

    assert status == 0
    assert prompts == ["bmp file path: ", "out file path: "]
    assert target.exists()


def test_invalid_format(tmp_path):
    path = tmp_path / "bad.bmp"
    path.write_bytes(make_bmp(2, 2, magic=b"XX"))
    status, text, _ = run(str(path), "unused")
    assert status == 1
    assert text == "error: invalid bmp file\n"


def test_unsupported_depth(tmp_path):
    path = tmp_path / "paletted.bmp"
    path.write_bytes(make_bmp(2, 2, depth=8))
    status, text, _ = run(str(path), "unused")
    assert status == 1
    assert text == "error: unsupported depth\n"


def test_top_down(tmp_path):
    path = tmp_path / "topdown.bmp"
    path.write_bytes(make_bmp(2, -2))
    status, text, _ = run(str(path), "unused")
    assert status == 1
    assert text == "error: unsupported bmp variant\n"


def test_missing_file(tmp_path):
    path = tmp_path / "missing.bmp"
    status, text, _ = run(str(path), "unused")
    assert status == 1
    assert text.startswith(f"file `{path}` error: ")


def test_unwritable_output(tmp_path, black_bmp):
    target = tmp_path / "no-such-dir" / "out.bmp"
    status, text, _ = run(str(black_bmp), str(target))
    assert status == 1
    assert f"file `{target}` error: " in text


def test_main_parses_arguments(tmp_path, black_bmp, capsys):
    target = tmp_path / "out.bmp"
    assert console.main([str(black_bmp), str(target)]) == 0
    assert target.exists()
    assert "* " in capsys.readouterr().out


@pytest.mark.parametrize("error", [EOFError, KeyboardInterrupt])
def test_prompt_interrupted(error):
    out = io.StringIO()

    def ask(prompt):
        raise error

    assert console.run(out=out, ask=ask) == 1
    assert out.getvalue() == "\nerror: aborted\n"


def test_output_prompt_interrupted(tmp_path, black_bmp):
    out = io.StringIO()

    def ask(prompt):
        raise EOFError

    assert console.run(str(black_bmp), out=out, ask=ask) == 1
    assert out.getvalue().endswith("\nerror: aborted\n")
    assert list(tmp_path.iterdir()) == [black_bmp]
