"""
Shared fixtures for the Hub Scraper tests
"""

import pytest

from hubscraper.core.fetcher import parse_html
from hubscraper.core.logging import logging_manager, setup_logging


DETAIL_URL = "https://hub.pointfive.co/inefficiencies/idle-ec2/"

DETAIL_HTML = """
<html>
<head>
  <title>Idle EC2 Instances | Hub</title>
  <script>var label = "Detection";</script>
</head>
<body>
  <nav><a href="/hub">Hub</a></nav>
  <main>
    <h1>Idle EC2 Instances</h1>
    <p>By Jane Doe</p>
    <div class="meta">
      <div>Service Category</div><div>Compute</div>
      <div>Cloud Provider</div><div>AWS</div>
      <div>Service Name</div><div>Amazon EC2</div>
      <div>Inefficiency Type</div><div>Idle Resource</div>
    </div>
    <h2>Explanation</h2>
    <p>Instances that run   with
       low utilization.</p>
    <p>They still incur charges.</p>
    <h2>Relevant Billing Model</h2>
    <p>On-demand hourly billing.</p>
    <h2>Detection</h2>
    <p>Look for:</p>
    <ul>
      <li>CPU below 5%</li>
      <li>  Network idle  </li>
      <li>   </li>
      <li>No attached users</li>
    </ul>
    <h2>Remediation</h2>
    <ol>
      <li>Stop the instance</li>
      <li>Terminate after review</li>
    </ol>
    <h2>Relevant Documentation</h2>
    <ul>
      <li><a href="/docs/ec2">EC2 docs</a></li>
      <li><a href="https://aws.amazon.com/ec2/pricing/">Pricing</a></li>
      <li><a href="/docs/ec2">EC2 docs again</a></li>
      <li><a href="mailto:team@example.com">Mail us</a></li>
    </ul>
  </main>
</body>
</html>
"""

BARE_HTML = """
<html><body>
  <h1>Unlabelled Page</h1>
  <p>Nothing but free text here.</p>
</body></html>
"""


@pytest.fixture(scope="session", autouse=True)
def configure_logging(tmp_path_factory):
    """Route test logging to a temporary file"""
    log_dir = tmp_path_factory.mktemp("logs")
    setup_logging(level="WARNING", log_file=str(log_dir / "test.log"))
    yield
    logging_manager.close()


@pytest.fixture
def detail_document():
    """Parsed detail page with every section present"""
    return parse_html(DETAIL_HTML)


@pytest.fixture
def bare_document():
    """Parsed page without any labelled field or section heading"""
    return parse_html(BARE_HTML)


@pytest.fixture
def detail_html():
    """Raw HTML of the full detail page"""
    return DETAIL_HTML
