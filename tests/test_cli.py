from datetime import date

from PIL import Image
from lifegrid import Settings, cli, codec


def test_render_writes_png(tmp_path, capsys):
    out = tmp_path / "wall.png"
    code = cli.main(["render", "--birth-date", "1990-05-01", "--device", "iphone-se", "-o", str(out)])
    assert code == 0
    with Image.open(out) as image:
        assert image.size == (750, 1334)
    assert "750x1334" in capsys.readouterr().out


def test_render_width(tmp_path):
    out = tmp_path / "small.png"
    assert cli.main(["render", "--birth-date", "1990-05-01", "--device", "iphone-se",
                     "--width", "375", "-o", str(out)]) == 0
    with Image.open(out) as image:
        assert image.size == (375, 667)


def test_token_uses_country_preset(capsys):
    assert cli.main(["token", "--birth-date", "1990-05-01", "--country", "JP", "--theme", "dark"]) == 0
    settings = codec.decode(capsys.readouterr().out.split()[0])
    assert settings.life_expectancy == 84
    assert settings.theme == "dark"
    assert settings.show_labels is True


def test_token_with_url(capsys):
    assert cli.main(["token", "--birth-date", "1990-05-01", "--no-labels",
                     "--base-url", "https://example.com"]) == 0
    token, url = capsys.readouterr().out.split()
    assert url == f"https://example.com/api/wallpaper?token={token}"
    assert codec.decode(token).show_labels is False


def test_render_from_token(tmp_path):
    token = codec.encode(Settings(birth_date=date(1990, 5, 1), life_expectancy=70,
                                  device="iphone-se", shape="square", theme="sepia"))
    out = tmp_path / "token.png"
    assert cli.main(["render", "--token", token, "-o", str(out)]) == 0
    assert out.exists()


def test_invalid_input_exit_code(tmp_path, capsys):
    assert cli.main(["render", "--birth-date", "1990-02-30", "-o", str(tmp_path / "x.png")]) == 2
    assert cli.main(["render", "--life-expectancy", "0", "--birth-date", "1990-01-01",
                     "-o", str(tmp_path / "x.png")]) == 2
    assert cli.main(["token", "--token", "%%%"]) == 2
    assert cli.main(["token"]) == 2
    assert "error:" in capsys.readouterr().err


def test_devices_listing(capsys):
    assert cli.main(["devices"]) == 0
    out = capsys.readouterr().out
    assert "iphone-16-pro" in out and "(default)" in out


def test_no_command_prints_help():
    assert cli.main([]) == 1
