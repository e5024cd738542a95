import threading
from collections import Counter

import pytest

from conftest import COPY_COMMAND
from releaser.errors import EncodeFailureError
from releaser.hashing import HashStore, crc32_file
from releaser.types import CommandResult, Job, Track, number_tracks
from releaser.workers import EncoderPool, JobQueue, TrackEncoder


def _jobs(n):
    return number_tracks(Track(path=f"{i}.wav", artist="a", title=f"t{i}") for i in range(n))


def test_job_queue_is_fifo_and_drains():
    jobs = _jobs(3)
    queue = JobQueue(jobs)
    assert len(queue) == 3
    assert [queue.take(), queue.take(), queue.take()] == jobs
    assert queue.take() is None


@pytest.mark.parametrize("workers", [1, 3, 8])
def test_pool_processes_each_job_exactly_once(workers):
    jobs = _jobs(50)
    seen = Counter()
    names = set()
    lock = threading.Lock()

    def encode(job):
        with lock:
            seen[job.number] += 1
            names.add(threading.current_thread().name)

    EncoderPool(workers, encode).run(JobQueue(jobs))
    assert seen == Counter({j.number: 1 for j in jobs})
    assert all(name.startswith("encoder-") for name in names)
    assert len(names) <= workers


def test_pool_with_more_workers_than_jobs():
    seen = []
    EncoderPool(8, seen.append).run(JobQueue(_jobs(2)))
    assert sorted(j.number for j in seen) == [1, 2]


def test_pool_reraises_first_failure_and_stops_draining():
    queue = JobQueue(_jobs(20))

    def encode(job):
        raise RuntimeError(f"boom {job.number}")

    with pytest.raises(RuntimeError, match="boom"):
        EncoderPool(1, encode).run(queue)
    assert len(queue) == 19


def test_pool_rejects_zero_workers():
    with pytest.raises(ValueError):
        EncoderPool(0, lambda job: None)


def _encoder(release, tmp_path, hashes, **kwargs):
    mp3_dir = tmp_path / "mp3"
    flac_dir = tmp_path / "flac"
    mp3_dir.mkdir(exist_ok=True)
    flac_dir.mkdir(exist_ok=True)
    values = dict(
        release=release,
        mp3_dir=str(mp3_dir),
        flac_dir=str(flac_dir),
        mp3_command=COPY_COMMAND,
        flac_command=COPY_COMMAND,
        group_initials="GRP",
        hashes=hashes,
    )
    values.update(kwargs)
    return TrackEncoder(**values)


def test_track_encoder_writes_both_formats_and_hashes_mp3(make_release, tmp_path):
    release = make_release(artist="artist")
    hashes = HashStore()
    encoder = _encoder(release, tmp_path, hashes)
    job = Job(number=2, track=release.tracks[1])
    encoder.encode(job)

    mp3 = tmp_path / "mp3" / "02-artist-main_theme-grp.mp3"
    flac = tmp_path / "flac" / "02 - artist - Main Theme.flac"
    assert mp3.exists()
    assert flac.exists()
    assert hashes.snapshot() == {mp3.name: crc32_file(str(mp3))}


def test_track_encoder_runs_mp3_before_flac(make_release, tmp_path):
    release = make_release()
    calls = []

    def runner(command):
        calls.append(command)
        return CommandResult(command=command, returncode=0)

    encoder = _encoder(release, tmp_path, HashStore(), mp3_command="mp3 $output$",
                       flac_command="flac $output$", runner=runner)
    encoder.encode(Job(number=1, track=release.tracks[0]))
    assert calls[0].startswith("mp3 ") and calls[0].endswith(".mp3")
    assert calls[1].startswith("flac ") and calls[1].endswith(".flac")


def test_track_encoder_raises_on_nonzero_exit(make_release, tmp_path):
    release = make_release()
    hashes = HashStore()
    encoder = _encoder(release, tmp_path, hashes, mp3_command="echo bad >&2; exit 2")
    with pytest.raises(EncodeFailureError) as info:
        encoder.encode(Job(number=1, track=release.tracks[0]))
    assert info.value.result.returncode == 2
    assert "bad" in str(info.value)
    assert len(hashes) == 0


def test_track_encoder_ignores_exit_status_when_disabled(make_release, tmp_path):
    release = make_release()
    hashes = HashStore()
    encoder = _encoder(release, tmp_path, hashes, mp3_command="exit 2", check_exit_status=False)
    encoder.encode(Job(number=1, track=release.tracks[0]))
    assert len(hashes) == 0
    assert (tmp_path / "flac" / "01 - Artist - Intro.flac").exists()
