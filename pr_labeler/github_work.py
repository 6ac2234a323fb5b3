"""
Operations on GitHub data.
"""

import base64
import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote

from pr_labeler.types import PrDict, PrId
from pr_labeler.utils import log_check_response, paginated_get, retry_get

logger = logging.getLogger(__name__)


def get_pull_request(session, prid: PrId) -> PrDict:
    """Get the full JSON description of a pull request."""
    resp = retry_get(session, f"/repos/{prid.full_name}/pulls/{prid.number}")
    log_check_response(resp)
    return resp.json()


def get_changed_files(session, prid: PrId) -> List[str]:
    """Get the paths of all the files changed by a pull request."""
    url = f"/repos/{prid.full_name}/pulls/{prid.number}/files"
    changed_files = [f["filename"] for f in paginated_get(url, session=session)]

    logger.debug("found changed files:")
    for changed_file in changed_files:
        logger.debug("  " + changed_file)

    return changed_files


def read_repo_file(session, prid: PrId, file_path: str, ref: Optional[str] = None) -> str:
    """
    Read the text of a file in the pull request's repo.

    Arguments:
        `file_path`: the path to the file within the repo.
        `ref`: the commit sha, branch or tag to read from.  The default branch
            if not provided.

    Returns:
        The text of the file, decoded as UTF-8.
    """
    url = f"/repos/{prid.full_name}/contents/{quote(file_path)}"
    params = {"ref": ref} if ref else None
    logger.debug(f"Grabbing {file_path} from {prid.full_name} at {ref or 'default branch'}")
    resp = session.get(url, params=params)
    log_check_response(resp)
    content: Dict[str, Any] = resp.json()
    if content.get("encoding") == "base64":
        return base64.b64decode(content["content"]).decode("utf-8")
    return content["content"]


def add_labels(session, prid: PrId, labels: List[str]) -> None:
    """Add `labels` to a pull request, in one request."""
    url = f"/repos/{prid.full_name}/issues/{prid.number}/labels"
    resp = session.post(url, json={"labels": labels})
    log_check_response(resp)


def remove_label(session, prid: PrId, label: str) -> None:
    """Remove one label from a pull request."""
    url = f"/repos/{prid.full_name}/issues/{prid.number}/labels/{quote(label, safe='')}"
    resp = session.delete(url)
    log_check_response(resp)
