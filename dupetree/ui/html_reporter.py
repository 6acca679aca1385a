# dupetree/ui/html_reporter.py
import html
import logging

from dupetree.core.models import ScanReport
from .console_reporter import human_readable_size

logger = logging.getLogger(__name__)


def generate_html_report(report: ScanReport, output_html_path: str) -> bool:
    """
    Generates a basic HTML report listing duplicated directories and files.

    Args:
        report (ScanReport): Result of a duplicate scan.
        output_html_path (str): Path to save the generated HTML file.

    Returns:
        bool: True if the report was written.
    """
    file_rows = report.duplicated_files or []
    dir_rows = report.duplicated_dirs or []
    esc = html.escape

    # Basic inline CSS for readability
    html_style = """
    <style>
        body { font-family: sans-serif; margin: 20px; background-color: #f4f4f4; color: #333; }
        h1 { color: #333; border-bottom: 2px solid #337ab7; padding-bottom: 10px; }
        h2 { color: #337ab7; margin-top: 30px; border-bottom: 1px solid #ccc; padding-bottom: 5px;}
        ul { list-style-type: none; padding-left: 0; }
        li { background-color: #fff; border: 1px solid #ddd; margin-bottom: 8px; padding: 10px; border-radius: 4px; }
        table { border-collapse: collapse; background-color: #fff; }
        th, td { border: 1px solid #ddd; padding: 6px 10px; text-align: left; }
        .file-path { font-weight: bold; }
        .file-details { font-size: 0.9em; color: #555; }
        .summary { background-color: #e7f3fe; border-left: 6px solid #2196F3; padding: 15px; margin-bottom: 20px; }
        .group-header { margin-bottom: 10px;}
    </style>
    """

    html_content = f"""
    <!DOCTYPE html>
    <html lang="en">
    <head>
        <meta charset="UTF-8">
        <meta name="viewport" content="width=device-width, initial-scale=1.0">
        <title>dupetree Report</title>
        {html_style}
    </head>
    <body>
        <h1>dupetree - Duplicate Report for {esc(report.scanned_directory)}</h1>

        <div class="summary">
            <p><strong>Summary:</strong></p>
            <p>Files scanned: {report.total_files_scanned} ({human_readable_size(report.total_size_scanned_bytes)})</p>
            <p>Duplicated file groups: {len(file_rows)}</p>
            <p>Duplicated directory groups: {len(report.directory_groups)}</p>
            <p>Potential savings: {human_readable_size(report.potential_total_savings_bytes)}</p>
            <p>Skipped entries: {len(report.errors)}</p>
        </div>
    """

    if not report.has_duplicates:
        html_content += "<p>No duplicates found.</p>"

    if dir_rows:
        html_content += """
        <h2>Duplicated directories</h2>
        <table>
            <tr><th>Group</th><th>Directory</th><th>Files</th><th>Directories in group</th><th>Absolute path</th></tr>
        """
        for row in dir_rows:
            html_content += f"""
            <tr><td>{row.dup_group}</td><td class="file-path">{esc(row.dir)}</td><td>{row.n_files}</td>
            <td>{row.n_dup_dirs}</td><td>{esc(row.dir_abs)}</td></tr>
            """
        html_content += "</table>"

    for row in file_rows:
        html_content += f"""
        <div class="group-header">
            <h2>Duplicate Set {row.dup_group} (Hash: {esc(row.content_hash)})</h2>
            <p class="file-details">
                Number of files: {row.n_files} |
                Size each: {row.file_size_mb:.2f} MB |
                Extension(s): {esc(row.file_ext) or "none"}
            </p>
        </div>
        <ul>
        """
        for member in row.files:
            html_content += f"""
            <li>
                <span class="file-path">{esc(member.file_rel)}</span>
                <br>
                <span class="file-details">{esc(member.file_abs)} | Modified: {member.modified:%Y-%m-%d %H:%M:%S}</span>
            </li>
            """
        html_content += "</ul>"

    html_content += """
    </body>
    </html>
    """

    try:
        with open(output_html_path, 'w', encoding='utf-8') as f:
            f.write(html_content)
    except OSError as e:
        logger.error("Error writing HTML report to %s: %s", output_html_path, e)
        return False
    return True
