"""
Shared pytest setup: keep the transcript cache database out of the project tree.
"""
import os
import tempfile

os.environ.setdefault("STUDYPATH_DATA_DIR", tempfile.mkdtemp(prefix="studypath-tests-"))
os.environ.setdefault("ENABLE_TRANSCRIPT_CACHE", "false")
