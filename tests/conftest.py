from datetime import date

import pytest

from releaser.config import ReleaserConfig
from releaser.types import Release, Track

COPY_COMMAND = 'cp "$input$" "$output$"'


def fake_duration(path):
    return 61


@pytest.fixture
def make_release(tmp_path):
    def _make(titles=("Intro", "Main Theme"), artist="Artist", missing=(), cover=True):
        src = tmp_path / "src"
        src.mkdir(exist_ok=True)
        tracks = []
        for i, title in enumerate(titles, start=1):
            wav = src / f"{i}.wav"
            if i not in missing:
                wav.write_bytes(f"RIFF{i}{title}".encode("utf-8") * 50)
            tracks.append(Track(path=str(wav), artist=artist, title=title))
        cover_path = src / "cover.jpg"
        if cover:
            cover_path.write_bytes(b"\xff\xd8cover")
        return Release(
            artist=artist,
            title="Some Album",
            year=2009,
            genre="Electronic",
            label="Label Ltd",
            notes="Enjoy",
            retail_date=date(2009, 3, 1),
            release_date=date(2009, 3, 14),
            cover_path=str(cover_path),
            tracks=tuple(tracks),
        )
    return _make


@pytest.fixture
def nfo_template(tmp_path):
    path = tmp_path / "release.nfo"
    path.write_text(
        "$artist$ - $release$ ($genre$)\n"
        "$label$ $retail_date$ $release_date$ $encoder$\n"
        "$number$. $title$ [$duration$]\n"
        "Total: $total_duration$ in $track_count$ tracks\n"
        "$notes$\n",
        encoding="utf-8",
    )
    return path


@pytest.fixture
def make_config(tmp_path, nfo_template):
    def _make(**overrides):
        values = dict(
            mp3_release_dir=str(tmp_path / "mp3"),
            flac_release_dir=str(tmp_path / "flac"),
            mp3_encoder_command=COPY_COMMAND,
            flac_encoder_command=COPY_COMMAND,
            group_initials="GRP",
            mp3_encoder_name="LAME -V0",
            nfo_template_path=str(nfo_template),
            worker_count=2,
            check_exit_status=True,
        )
        values.update(overrides)
        return ReleaserConfig(**values)
    return _make
