from shoveltool.video import DummyVideo, VideoSetup


def test_commit_without_framebuffer_does_nothing():
    video = DummyVideo()
    video.update()
    assert video.commit() is False
    assert video.pending is None


def test_commit_consumes_framebuffer():
    video = DummyVideo(VideoSetup(fbw=4, fbh=2))
    pixels = bytes(4 * 2 * 4)
    video.set_framebuffer(pixels, 4, 2)
    assert video.pending.w == 4
    assert video.pending.h == 2
    assert video.pending.rgbx is pixels
    assert video.commit() is True
    assert video.commit() is False


def test_last_framebuffer_wins():
    video = DummyVideo()
    first = bytes(4)
    second = bytes(16)
    video.set_framebuffer(first, 1, 1)
    video.set_framebuffer(second, 2, 2)
    assert video.pending.rgbx is second
    assert (video.pending.w, video.pending.h) == (2, 2)


def test_setup_is_kept():
    setup = VideoSetup(w=640, h=360, title="game", fullscreen=True)
    video = DummyVideo(setup)
    assert video.setup.title == "game"
    assert video.setup.fullscreen is True
    assert video.provides_events is False
    assert video.driver_name == "dummy"


def test_close_clears_pending_and_is_repeatable():
    video = DummyVideo()
    video.set_framebuffer(bytes(4), 1, 1)
    video.close()
    video.close()
    assert video.pending is None
    assert video.commit() is False


def test_context_manager_closes():
    with DummyVideo() as video:
        video.set_framebuffer(bytes(4), 1, 1)
        assert video.pending is not None and video.pending.w == 1
    assert video.pending is None