import asyncio

import pytest
import zmq
import zmq.asyncio

from gaze_unlock.models import ProgressSnapshot
from gaze_unlock.sinks import ZMQProgressSink
from gaze_unlock.ui import LoggingUnlockView


def test_progress_wire_format():
    snapshot = ProgressSnapshot(target_index=2, achieved=(True, True, False, False), unlocked=False)
    message = ZMQProgressSink.encode(snapshot)

    assert message == b"unlk" + bytes([2, 1, 1, 0, 0, 0])
    assert ZMQProgressSink.decode(message) == snapshot


def test_decode_rejects_foreign_topic():
    with pytest.raises(ValueError):
        ZMQProgressSink.decode(b"gaze" + bytes(6))


def test_progress_is_published():
    endpoint = "inproc://gaze-unlock-progress"

    async def scenario():
        sink = ZMQProgressSink(host=endpoint)
        await sink.start()
        sub = sink._ctx.socket(zmq.SUB)
        sub.setsockopt(zmq.SUBSCRIBE, b"unlk")
        sub.connect(endpoint)
        try:
            final = ProgressSnapshot(target_index=3, achieved=(True,) * 4, unlocked=True)
            # PUB drops messages until the subscription has propagated.
            for _ in range(50):
                await sink.send(final)
                if await sub.poll(timeout=20):
                    return ZMQProgressSink.decode(await sub.recv())
            return None
        finally:
            sub.close(linger=0)
            await sink.close()

    assert asyncio.run(scenario()) == ProgressSnapshot(3, (True,) * 4, True)


@pytest.mark.parametrize(
    "snapshot, markers",
    [
        (ProgressSnapshot(0, (False,) * 4, False), ">..."),
        (ProgressSnapshot(2, (True, True, False, False), False), "**>."),
        (ProgressSnapshot(3, (True,) * 4, True), "****"),
    ],
)
def test_console_markers(snapshot, markers):
    assert LoggingUnlockView.render_markers(snapshot) == markers
