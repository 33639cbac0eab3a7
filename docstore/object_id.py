from __future__ import annotations

import binascii
import os
import time


def generate_object_id() -> str:
    """Generate a 24-char hex string similar to a Mongo ObjectId."""
    ts = int(time.time())
    rand = binascii.b2a_hex(os.urandom(8)).decode("ascii")
    return f"{ts:08x}{rand}"[:24]
