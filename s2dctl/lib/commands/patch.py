from typing import List

from s2dctl.common import reports
from s2dctl.common.maintenance_dto import NodePatchLevelDto
from s2dctl.common.reports.item import ReportItem
from s2dctl.common.types import (
    PatchLevelStatus,
    StringSequence,
)
from s2dctl.lib.env import LibraryEnvironment
from s2dctl.lib.patch_metadata import (
    UpdateChain,
    download_metadata,
    parse_metadata,
    parse_release_date,
)


def check_patch_level(
    env: LibraryEnvironment,
    node_names: StringSequence,
    metadata_url: str,
) -> List[NodePatchLevelDto]:
    """
    Compare operating system builds of nodes with the published update chain

    node_names -- nodes to check
    metadata_url -- https url of the update metadata document
    """
    metadata = parse_metadata(
        metadata_url, download_metadata(metadata_url, env.request_timeout)
    )
    chain = UpdateChain(metadata.updates)
    api = env.get_cluster_api()
    result_list = []
    for node in node_names:
        build = api.get_os_build(node)
        if build not in chain:
            env.report_processor.report(
                ReportItem.warning(
                    reports.messages.NodeBuildNotInUpdateChain(node, build)
                )
            )
            result_list.append(
                NodePatchLevelDto(
                    computer_name=node,
                    current_build=build,
                    latest_build=chain.latest_build,
                    status=PatchLevelStatus.UNKNOWN,
                )
            )
            continue
        missing = chain.get_missing_updates(build)
        result_list.append(
            NodePatchLevelDto(
                computer_name=node,
                current_build=build,
                latest_build=chain.latest_build,
                status=(
                    PatchLevelStatus.UPDATE_AVAILABLE
                    if missing
                    else PatchLevelStatus.UP_TO_DATE
                ),
                missing_updates=[
                    "{0} ({1})".format(
                        update.kb,
                        parse_release_date(update.release_date).isoformat(),
                    )
                    for update in missing
                ],
            )
        )
    return result_list
