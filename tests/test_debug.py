import json

from pagestitch.lib.s1_image import ImageBuffer
from pagestitch.lib.s7_debug import (
    CaptureDebugLogger,
    FileDebugScreenshotsProvider,
    NullDebugScreenshotsProvider,
    create_debug_screenshots_provider,
)

from conftest import make_page, png_bytes


def test_file_provider_writes_prefixed_png(tmp_path):
    provider = FileDebugScreenshotsProvider(path=str(tmp_path), prefix="shot_")
    image = ImageBuffer(png_bytes(make_page(8, 6)))

    path = provider.save(image, "original")

    assert path.startswith(str(tmp_path))
    assert path.endswith("_original.png")
    with open(path, "rb") as f:
        assert f.read() == image.to_bytes()


def test_factory_returns_null_provider_when_disabled(tmp_path):
    provider = create_debug_screenshots_provider(enabled=False, path=str(tmp_path))

    assert isinstance(provider, NullDebugScreenshotsProvider)
    assert provider.save(ImageBuffer(png_bytes(make_page(4, 4))), "original") is None
    assert list(tmp_path.iterdir()) == []
    assert isinstance(create_debug_screenshots_provider(enabled=True), FileDebugScreenshotsProvider)


def test_logger_writes_jsonl_and_summary(tmp_path):
    logger = CaptureDebugLogger(log_dir=str(tmp_path))

    logger.log_step("measuring_page", "mesure", entire=(300, 500))
    logger.log_tile(0, (0, 0), (0, 0), (300, 200), reused=True)
    logger.log_tile(1, (0, 150), (0, 150), (300, 200))
    session = logger.save_session()

    summary = logger.get_summary()
    assert summary["steps"] == 1
    assert summary["tiles"] == 2
    assert summary["reused_tiles"] == 1
    assert summary["states"] == ["measuring_page"]

    lines = (tmp_path / f"tiles_{logger.session_id}.jsonl").read_text(encoding="utf-8").splitlines()
    assert [json.loads(line)["index"] for line in lines] == [0, 1]
    with open(session, encoding="utf-8") as f:
        assert len(json.load(f)["tiles"]) == 2


def test_disabled_logger_writes_nothing(tmp_path):
    logger = CaptureDebugLogger(log_dir=str(tmp_path / "logs"), enabled=False)
    logger.log_step("done")

    assert logger.save_session() is None
    assert not (tmp_path / "logs").exists()
    assert logger.get_summary()["steps"] == 1
