import datetime
import json
from unittest import TestCase

import pycurl

from s2dctl.common import reports
from s2dctl.lib import patch_metadata
from s2dctl.lib.errors import LibraryError
from s2dctl.lib.patch_metadata import (
    PatchMetadataDto,
    UpdateChain,
    UpdateDto,
)

from s2dctl_test.tools import fixture
from s2dctl_test.tools.assertions import assert_raise_library_error
from s2dctl_test.tools.custom_mock import MockCurl
from s2dctl_test.tools.misc import create_patcher

patch_lib = create_patcher(patch_metadata)

URL = "https://updates.example.com/s2d.json"

UPDATE_LIST = [
    UpdateDto("17763.1000", "KB4500000", "2024-01-09"),
    UpdateDto("17763.1100", "KB4500001", "2024-02-13", "17763.1000"),
    UpdateDto("17763.1200", "KB4500002", "2024-03-12", "17763.1100"),
]


def _metadata_json(update_list=None):
    return json.dumps(
        {
            "product": "Windows Server 2019",
            "updates": [
                {
                    "build": update.build,
                    "kb": update.kb,
                    "release_date": update.release_date,
                    "previous_build": update.previous_build,
                }
                for update in (
                    UPDATE_LIST if update_list is None else update_list
                )
            ],
        }
    )


class DownloadMetadata(TestCase):
    def test_success(self):
        curl = MockCurl({pycurl.RESPONSE_CODE: 200}, b'{"product": "x"}')
        with patch_lib("pycurl.Curl", return_value=curl):
            self.assertEqual(
                '{"product": "x"}', patch_metadata.download_metadata(URL, 30)
            )
        self.assertEqual(URL.encode("utf-8"), curl.opts[pycurl.URL])
        self.assertEqual(30, curl.opts[pycurl.TIMEOUT])
        self.assertEqual(pycurl.PROTO_HTTPS, curl.opts[pycurl.PROTOCOLS])
        self.assertTrue(curl.closed)

    def test_http_error(self):
        curl = MockCurl({pycurl.RESPONSE_CODE: 404}, b"Not Found")
        with patch_lib("pycurl.Curl", return_value=curl):
            assert_raise_library_error(
                lambda: patch_metadata.download_metadata(URL, 30),
                fixture.error(
                    reports.codes.PATCH_METADATA_DOWNLOAD_FAILED,
                    url=URL,
                    reason="HTTP error: 404",
                ),
            )
        self.assertTrue(curl.closed)

    def test_connection_error(self):
        curl = MockCurl(
            exception=pycurl.error(6, "Could not resolve host: updates")
        )
        with patch_lib("pycurl.Curl", return_value=curl):
            assert_raise_library_error(
                lambda: patch_metadata.download_metadata(URL, 30),
                fixture.error(
                    reports.codes.PATCH_METADATA_DOWNLOAD_FAILED,
                    url=URL,
                    reason="Could not resolve host: updates",
                ),
            )
        self.assertTrue(curl.closed)


class ParseMetadata(TestCase):
    def test_success(self):
        self.assertEqual(
            PatchMetadataDto("Windows Server 2019", UPDATE_LIST),
            patch_metadata.parse_metadata(URL, _metadata_json()),
        )

    def assert_invalid(self, text):
        with self.assertRaises(LibraryError) as cm:
            patch_metadata.parse_metadata(URL, text)
        report_item = cm.exception.args[0]
        self.assertEqual(
            reports.codes.PATCH_METADATA_INVALID, report_item.message.code
        )
        self.assertEqual(URL, report_item.message.url)

    def test_not_json(self):
        self.assert_invalid("<html></html>")

    def test_missing_key(self):
        self.assert_invalid(json.dumps({"product": "Windows Server 2019"}))

    def test_not_an_object(self):
        self.assert_invalid(json.dumps(["17763.1000"]))

    def test_invalid_update(self):
        self.assert_invalid(
            json.dumps({"product": "Windows Server 2019", "updates": ["x"]})
        )

    def test_invalid_release_date(self):
        self.assert_invalid(
            _metadata_json([UpdateDto("17763.1000", "KB4500000", "soon")])
        )


class ParseReleaseDate(TestCase):
    def test_date(self):
        self.assertEqual(
            datetime.date(2024, 2, 13),
            patch_metadata.parse_release_date("2024-02-13"),
        )

    def test_date_time(self):
        self.assertEqual(
            datetime.date(2024, 2, 13),
            patch_metadata.parse_release_date("2024-02-13T17:00:00Z"),
        )


class UpdateChainTest(TestCase):
    def setUp(self):
        self.chain = UpdateChain(UPDATE_LIST)

    def test_contains(self):
        self.assertIn("17763.1000", self.chain)
        self.assertIn("17763.1200", self.chain)
        self.assertNotIn("17763.900", self.chain)

    def test_contains_previous_build_only(self):
        chain = UpdateChain(
            [UpdateDto("17763.1100", "KB4500001", "2024-02-13", "17763.1000")]
        )
        self.assertIn("17763.1000", chain)

    def test_latest_build(self):
        self.assertEqual("17763.1200", self.chain.latest_build)

    def test_latest_build_of_parallel_chains(self):
        chain = UpdateChain(
            UPDATE_LIST
            + [UpdateDto("20348.500", "KB5000000", "2024-04-09")]
        )
        self.assertEqual("20348.500", chain.latest_build)

    def test_latest_build_empty(self):
        self.assertIsNone(UpdateChain([]).latest_build)

    def test_missing_updates(self):
        self.assertEqual(
            UPDATE_LIST[1:], self.chain.get_missing_updates("17763.1000")
        )
        self.assertEqual(
            UPDATE_LIST[2:], self.chain.get_missing_updates("17763.1100")
        )

    def test_up_to_date(self):
        self.assertEqual([], self.chain.get_missing_updates("17763.1200"))

    def test_unknown_build(self):
        self.assertEqual([], self.chain.get_missing_updates("17763.900"))

    def test_cycle(self):
        chain = UpdateChain(
            [
                UpdateDto("2", "KB2", "2024-02-01", "1"),
                UpdateDto("1", "KB1", "2024-01-01", "2"),
            ]
        )
        self.assertEqual(
            [UpdateDto("2", "KB2", "2024-02-01", "1")],
            chain.get_missing_updates("1"),
        )
