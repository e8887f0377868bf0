"""Printable HTML export of an assembled call sheet."""
from datetime import datetime
from html import escape

from schemas import CallSheetDocument


def _row(cells: list[str], placeholder: bool = False) -> str:
    style = ' style="height: 32px;"' if placeholder else ""
    return "<tr>" + "".join(f"<td{style}>{escape(cell)}</td>" for cell in cells) + "</tr>"


def generate_call_sheet_html(document: CallSheetDocument, generated_at: datetime | None = None) -> str:
    """Render the document as a self-contained HTML page ready for print or PDF conversion."""
    generated_at = generated_at or datetime.now()

    html = f"""
    <!DOCTYPE html>
    <html>
    <head>
        <meta charset="utf-8">
        <title>{escape(document.export_filename.removesuffix(".pdf"))}</title>
        <style>
            body {{ font-family: Arial, sans-serif; font-size: 12px; line-height: 1.4; color: #000; background-color: #fff; padding: 32px; }}
            .header {{ text-align: center; margin-bottom: 32px; }}
            .header h1 {{ font-size: 24px; font-weight: bold; margin-bottom: 8px; }}
            .header h2 {{ font-size: 18px; font-weight: normal; }}
            .columns {{ display: grid; grid-template-columns: 1fr 1fr; gap: 32px; margin-bottom: 24px; }}
            .indent {{ margin-left: 16px; }}
            .weather {{ text-align: center; margin-bottom: 24px; }}
            h3 {{ font-weight: bold; font-size: 16px; margin-bottom: 12px; }}
            table {{ width: 100%; border-collapse: collapse; border: 1px solid #000; margin-bottom: 32px; }}
            th, td {{ border: 1px solid #000; padding: 12px; text-align: center; }}
            th {{ background-color: #f3f4f6; font-weight: bold; padding: 8px; }}
            ul.looks {{ list-style: none; padding: 0; }}
            ul.looks li {{ margin-bottom: 4px; }}
            .footer {{ text-align: right; margin-top: 48px; font-style: italic; font-size: 11px; }}
            .generated {{ color: #666; font-size: 10px; }}
        </style>
    </head>
    <body>
        <div class="header">
            <h1>{escape(document.header.title)}</h1>
            <h2>{escape(document.header.date)}</h2>
        </div>

        <div class="columns">
            <div>
                <p><strong>Location:</strong></p>
                <p class="indent">{escape(document.location.address)}</p>
                <p class="indent">{escape(document.location.details)}</p>
            </div>
            <div>
                <p><strong>Location Contact:</strong></p>
                <p class="indent">{escape(document.contact.name)}</p>
                <p class="indent">{escape(document.contact.phone)}</p>
            </div>
        </div>

        <div class="weather">
            <p>{escape(document.weather.text)}</p>
        </div>

        <div class="columns">
            <div>
                <p><strong>General Call Time:</strong> {escape(document.timing.call_time)}</p>
                <p><strong>Wrap Time:</strong> {escape(document.timing.wrap_time)}</p>
            </div>
            <div>
                <p><strong>Lunch Break:</strong> {escape(document.timing.lunch_break)}</p>
                <p><strong>Estimated Wrap:</strong> {escape(document.timing.estimated_wrap)}</p>
            </div>
        </div>

        <h3>Crew:</h3>
        <table>
            <thead>
                <tr>
                    <th>Name</th>
                    <th>Role</th>
                    <th>Contact Number</th>
                    <th>Call Time</th>
                </tr>
            </thead>
            <tbody>
    """

    for row in document.crew:
        html += _row([row.name, row.role, row.phone, row.call_time], placeholder=row.placeholder)

    html += f"""
            </tbody>
        </table>

        <div>
            <p><strong>Entry/Parking:</strong></p>
            <p class="indent">{escape(document.parking)}</p>
        </div>
    """

    if document.looks:
        html += '<h3>Looks:</h3><ul class="looks">'
        for look in document.looks:
            html += f"<li>{escape(look.text)}</li>"
        html += "</ul>"

    if document.special_notes:
        html += f"<h3>Special Notes:</h3><p>{escape(document.special_notes)}</p>"

    footer_lines = "".join(f"<p>{escape(line)}</p>" for line in document.footer)
    html += f"""
        <div class="footer">
            {footer_lines}
            <p class="generated">Generated on {generated_at.strftime("%B %d, %Y at %I:%M %p")}</p>
        </div>
    </body>
    </html>
    """

    return html
