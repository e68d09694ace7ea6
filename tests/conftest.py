"""Shared test fixtures and configuration."""

import logging
import tempfile
from pathlib import Path

import pytest


SAMPLE_DIFF = """diff --git a/src/app.py b/src/app.py
index 1234567..abcdefg 100644
--- a/src/app.py
+++ b/src/app.py
@@ -1,3 +1,4 @@
 import sys
+import json
 import os
 import re
diff --git a/src/util.py b/src/util.py
index 7654321..gfedcba 100644
--- a/src/util.py
+++ b/src/util.py
@@ -10,6 +10,8 @@ def helper():
     x = 1
     y = 2
+    z = 3
+    w = 4
     return x
     # end
     pass
     pass
@@ -40,3 +42,3 @@ def other():
     a = 1
-    b = 2
+    b = 3
     return a
"""

NO_NEWLINE_DIFF = """diff --git a/README b/README
index 1111111..2222222 100644
--- a/README
+++ b/README
@@ -1,2 +1,2 @@
 hello
-world
\\ No newline at end of file
+there
\\ No newline at end of file
"""

BINARY_SECTION = """diff --git a/image.png b/image.png
index 1234567..abcdefg 100644
Binary files a/image.png and b/image.png differ
"""


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def sample_diff():
    """Two files: src/app.py with one hunk, src/util.py with two."""
    return SAMPLE_DIFF


@pytest.fixture
def no_newline_diff():
    """A hunk whose old and new sides both lack a final newline."""
    return NO_NEWLINE_DIFF


@pytest.fixture
def diff_with_binary():
    """Sample diff with a binary section between two text files."""
    first, second = SAMPLE_DIFF.split("diff --git a/src/util.py", 1)
    return first + BINARY_SECTION + "diff --git a/src/util.py" + second


@pytest.fixture
def sample_patch_file(temp_dir, sample_diff):
    """Sample diff written to disk."""
    path = temp_dir / "input.diff"
    path.write_text(sample_diff)
    return path


@pytest.fixture(autouse=True)
def reset_hunkpick_logger():
    """Drop handlers installed by configure_logging between tests."""
    yield
    logger = logging.getLogger("hunkpick")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
