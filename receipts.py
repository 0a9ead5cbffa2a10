"""
receipts.py - Receipt Emission Primitives

Every computation in the relativistic core leaves a receipt: a flat JSON
record printed to stdout with a type, timestamp, tenant and payload hash.
Anomalies are receipts too; a StopRule is raised only after its anomaly
receipt has been emitted.

Exports:
    dual_hash: SHA256:BLAKE3 digest of bytes or str
    emit_receipt: Build, print and return a receipt dict
    merkle: Dual-hash Merkle root over a list of JSON-able items
    StopRule: Exception for conditions that must halt computation
"""

import hashlib
import json
from datetime import datetime, timezone
from typing import Any, Dict, List, Union

import blake3


class StopRule(Exception):
    """Raised when a stoprule fires. Computation must not continue."""
    pass


def dual_hash(data: Union[bytes, str]) -> str:
    """
    Hash data with SHA256 and BLAKE3.

    Args:
        data: Raw bytes or text (text is UTF-8 encoded)

    Returns:
        "<sha256 hex>:<blake3 hex>"
    """
    if isinstance(data, str):
        data = data.encode("utf-8")
    sha = hashlib.sha256(data).hexdigest()
    b3 = blake3.blake3(data).hexdigest()
    return f"{sha}:{b3}"


def emit_receipt(receipt_type: str, data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Emit a receipt as a single JSON line on stdout.

    Args:
        receipt_type: Receipt type name (see RECEIPT_SCHEMA)
        data: Receipt payload. "tenant_id" defaults to "default".

    Returns:
        The receipt dict
    """
    payload = json.dumps(data, sort_keys=True, default=str)
    receipt = {
        "receipt_type": receipt_type,
        "ts": datetime.now(timezone.utc).isoformat(),
        "tenant_id": data.get("tenant_id", "default"),
        "payload_hash": dual_hash(payload),
        **data,
    }
    print(json.dumps(receipt, default=str), flush=True)
    return receipt


def merkle(items: List[Any]) -> str:
    """
    Compute a Merkle root over items.

    Leaves are dual hashes of each item's canonical JSON. Odd levels
    duplicate their last node. An empty list hashes the empty string.
    """
    if not items:
        return dual_hash(b"")

    level = [dual_hash(json.dumps(item, sort_keys=True, default=str)) for item in items]
    while len(level) > 1:
        if len(level) % 2:
            level.append(level[-1])
        level = [dual_hash(level[i] + level[i + 1]) for i in range(0, len(level), 2)]
    return level[0]
