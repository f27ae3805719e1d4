from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Tuple

import requests

from codeatlas.domain.index_models import ProjectIndex
from codeatlas.infra.network.common import DEFAULT_HEADERS, DEFAULT_TIMEOUT

logger = logging.getLogger(__name__)


def new_project_id() -> str:
    """Generate a fresh project identifier."""
    return str(uuid.uuid4())


def build_document(index: ProjectIndex, project_id: str, owner: Optional[str] = None) -> Dict[str, Any]:
    """Wrap an index with the ownership and identity fields the store keys on."""
    document = index.to_dict()
    document.update({
        "projectId": project_id,
        "userId": owner,
        "createdAt": datetime.now(timezone.utc).isoformat(),
    })
    return document


def publish_index(
        url: str,
        index: ProjectIndex,
        project_id: str,
        owner: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT,
) -> Tuple[bool, str]:
    """Transmit a finished index to the persistence endpoint as JSON."""
    payload = build_document(index, project_id, owner)
    logger.info(f"Publishing project '{index.name}' ({project_id}) to {url}")

    try:
        response = requests.post(url, json=payload, headers=DEFAULT_HEADERS, timeout=timeout)
    except requests.exceptions.Timeout:
        msg = f"Persistence sink timed out after {timeout}s"
        logger.warning(msg)
        return False, msg
    except requests.exceptions.RequestException as e:
        msg = f"Communication error with persistence sink: {e}"
        logger.error(msg)
        return False, msg

    if response.status_code not in (200, 201):
        msg = f"Persistence sink rejected the index (HTTP {response.status_code})"
        logger.error(msg)
        return False, msg

    return True, "Project saved"
