"""
Pytest configuration and fixtures for the resume exporter tests.
"""

from io import BytesIO

import pytest
from docx import Document

from resume_html_to_docx.config import ConfigLoader

SAMPLE_RESUME_HTML = """
<h1>Jane Doe</h1>
<h4>Senior Software Engineer</h4>
<p><strong>SUMMARY</strong></p>
<p>Engineer with ten years of experience building distributed systems.</p>
<p><strong>EXPERIENCE</strong> | 2015 - Present</p>
<p><strong>Staff Engineer</strong> - Acme Corp, 2019 - Present</p>
<ul>
  <li>Led a team of 5</li>
  <li>• Cut build times by 40%</li>
</ul>
<p>Engineer with ten years of experience building distributed systems.</p>
<p><strong>SKILLS</strong></p>
<ul>
  <li>Languages: Go, Rust, Python</li>
  <li>Tools: Docker &amp; Kubernetes</li>
</ul>
"""


@pytest.fixture
def sample_html() -> str:
    """A small resume covering every block kind."""
    return SAMPLE_RESUME_HTML


@pytest.fixture
def config_loader() -> ConfigLoader:
    """Configuration loaded from the packaged resume_config.yaml."""
    return ConfigLoader()


@pytest.fixture
def open_docx():
    """Reopen serialized document bytes with python-docx."""

    def _open(data: bytes):
        return Document(BytesIO(data))

    return _open
