# dupetree/ui/__init__.py
from .console_reporter import print_report, human_readable_size
from .html_reporter import generate_html_report
