import datetime
import io
import json
from dataclasses import dataclass
from typing import (
    Dict,
    List,
    Optional,
)

import dacite
import pycurl
from dateutil import parser as date_parser

from s2dctl.common import reports
from s2dctl.common.interface.dto import (
    DataTransferObject,
    PayloadConversionError,
    from_dict,
)
from s2dctl.common.reports.item import ReportItem
from s2dctl.lib.errors import LibraryError


@dataclass(frozen=True)
class UpdateDto(DataTransferObject):
    build: str
    kb: str
    release_date: str
    previous_build: Optional[str] = None


@dataclass(frozen=True)
class PatchMetadataDto(DataTransferObject):
    product: str
    updates: List[UpdateDto]


def download_metadata(url: str, timeout: int) -> str:
    output = io.BytesIO()
    handle = pycurl.Curl()
    try:
        handle.setopt(pycurl.PROTOCOLS, pycurl.PROTO_HTTPS)
        handle.setopt(pycurl.URL, url.encode("utf-8"))
        handle.setopt(pycurl.TIMEOUT, timeout)
        handle.setopt(pycurl.FOLLOWLOCATION, 1)
        handle.setopt(pycurl.WRITEFUNCTION, output.write)
        handle.setopt(pycurl.NOSIGNAL, 1)
        handle.perform()
        response_code = handle.getinfo(pycurl.RESPONSE_CODE)
    except pycurl.error as e:
        # pycurl.error's args: (error number, error message)
        raise LibraryError(
            ReportItem.error(
                reports.messages.PatchMetadataDownloadFailed(
                    url, str(e.args[-1]) if e.args else str(e)
                )
            )
        ) from e
    finally:
        handle.close()
    if response_code != 200:
        raise LibraryError(
            ReportItem.error(
                reports.messages.PatchMetadataDownloadFailed(
                    url, f"HTTP error: {response_code}"
                )
            )
        )
    return output.getvalue().decode("utf-8")


def parse_release_date(value: str) -> datetime.date:
    return date_parser.isoparse(value).date()


def parse_metadata(url: str, text: str) -> PatchMetadataDto:
    try:
        metadata = from_dict(PatchMetadataDto, json.loads(text))
        for update in metadata.updates:
            parse_release_date(update.release_date)
    except (
        ValueError,
        TypeError,
        dacite.DaciteError,
        PayloadConversionError,
    ) as e:
        raise LibraryError(
            ReportItem.error(
                reports.messages.PatchMetadataInvalid(url, str(e))
            )
        ) from e
    return metadata


class UpdateChain:
    """
    Builds linked by updates: each update turns its previous build into its
    own build
    """

    def __init__(self, update_list: List[UpdateDto]):
        self._by_build: Dict[str, UpdateDto] = {}
        self._successor: Dict[str, UpdateDto] = {}
        for update in update_list:
            self._by_build[update.build] = update
            if update.previous_build:
                self._successor[update.previous_build] = update

    def __contains__(self, build: str) -> bool:
        return build in self._by_build or build in self._successor

    @property
    def latest_build(self) -> Optional[str]:
        """
        The most recently released build without a successor
        """
        candidates = [
            update
            for build, update in self._by_build.items()
            if build not in self._successor
        ]
        if not candidates:
            return None
        return max(
            candidates,
            key=lambda update: parse_release_date(update.release_date),
        ).build

    def get_missing_updates(self, build: str) -> List[UpdateDto]:
        """
        Return updates to be installed on top of build, in installation order
        """
        missing = []
        visited = {build}
        while build in self._successor:
            update = self._successor[build]
            if update.build in visited:
                # a cycle in the metadata
                break
            missing.append(update)
            visited.add(update.build)
            build = update.build
        return missing
