import json
import unittest
from dataclasses import FrozenInstanceError
from datetime import datetime, timezone

from vimeonetworking.videos.models import LiveModel, LiveStreamingStatus

LIVE_PAYLOAD = {
    "link": "rtmp://rtmp.cloud.vimeo.com/live",
    "key": "f5a1b2c3-stream-key",
    "active_time": "2017-06-01T19:13:04+00:00",
    "ended_time": None,
    "archived_time": None,
    "scheduled_start_time": "2017-06-01T19:00:00Z",
    "status": "streaming",
}


class TestLiveStreamingStatus(unittest.TestCase):
    def test_wire_values(self):
        self.assertEqual(
            [status.value for status in LiveStreamingStatus],
            ["unavailable", "pending", "ready", "streaming_preview", "streaming", "streaming_error", "done"],
        )

    def test_from_wire(self):
        self.assertIs(LiveStreamingStatus.from_wire("streaming_preview"), LiveStreamingStatus.STREAMING_PREVIEW)
        self.assertIsNone(LiveStreamingStatus.from_wire("STREAMING"))
        self.assertIsNone(LiveStreamingStatus.from_wire(None))


class TestLiveModel(unittest.TestCase):
    def test_from_dict(self):
        live = LiveModel.from_dict(LIVE_PAYLOAD)

        self.assertEqual(live.link, "rtmp://rtmp.cloud.vimeo.com/live")
        self.assertEqual(live.key, "f5a1b2c3-stream-key")
        self.assertEqual(live.active_time, datetime(2017, 6, 1, 19, 13, 4, tzinfo=timezone.utc))
        self.assertEqual(live.scheduled_start_time, datetime(2017, 6, 1, 19, 0, 0, tzinfo=timezone.utc))
        self.assertIsNone(live.ended_time)
        self.assertIsNone(live.archived_time)
        self.assertEqual(live.status, "streaming")
        self.assertIs(live.live_streaming_status, LiveStreamingStatus.STREAMING)

    def test_every_status(self):
        for status in LiveStreamingStatus:
            with self.subTest(status=status):
                self.assertIs(LiveModel.from_dict({"status": status.value}).live_streaming_status, status)

    def test_unknown_or_missing_status(self):
        self.assertIsNone(LiveModel.from_dict({"status": "bogus"}).live_streaming_status)
        self.assertIsNone(LiveModel.from_dict({}).live_streaming_status)
        self.assertEqual(LiveModel.from_dict({"status": "bogus"}).status, "bogus")

    def test_malformed_values_are_left_unset(self):
        live = LiveModel.from_dict(
            {
                "link": 42,
                "key": ["not", "a", "string"],
                "active_time": "yesterday",
                "ended_time": 1496344384,
                "archived_time": "",
                "status": {"state": "streaming"},
            }
        )

        self.assertEqual(live, LiveModel())
        self.assertIsNone(live.live_streaming_status)

    def test_naive_timestamp_is_utc(self):
        live = LiveModel.from_dict({"ended_time": "2017-06-01T20:00:00"})

        self.assertEqual(live.ended_time, datetime(2017, 6, 1, 20, 0, 0, tzinfo=timezone.utc))

    def test_non_mapping_payload(self):
        self.assertEqual(LiveModel.from_dict(None), LiveModel())
        self.assertEqual(LiveModel.from_dict(["streaming"]), LiveModel())

    def test_from_json(self):
        live = LiveModel.from_json(json.dumps({"status": "done", "link": "rtmp://example"}))

        self.assertIs(live.live_streaming_status, LiveStreamingStatus.DONE)
        self.assertEqual(live.link, "rtmp://example")

    def test_from_invalid_json(self):
        self.assertEqual(LiveModel.from_json("{not json"), LiveModel())

    def test_immutable(self):
        live = LiveModel.from_dict({"status": "ready"})

        with self.assertRaises(FrozenInstanceError):
            live.status = "done"

    def test_to_dict(self):
        live = LiveModel.from_dict(LIVE_PAYLOAD)

        self.assertEqual(
            live.to_dict(),
            {
                "link": "rtmp://rtmp.cloud.vimeo.com/live",
                "key": "f5a1b2c3-stream-key",
                "active_time": "2017-06-01T19:13:04+00:00",
                "scheduled_start_time": "2017-06-01T19:00:00+00:00",
                "status": "streaming",
            },
        )
        self.assertEqual(json.loads(live.to_json())["status"], "streaming")


if __name__ == "__main__":
    unittest.main()
