"""Static download page served at ``/``.

The page only triggers ``/api/export`` and saves the returned blob; all
dashboard interaction happens later inside the spreadsheet application.
"""

from html import escape

_INDEX_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <meta name="viewport" content="width=device-width, initial-scale=1">
  <meta name="description" content="Generate an interactive Excel dashboard for logistics reviews">
  <title>{title}</title>
  <style>
    body {{ margin: 0; font-family: system-ui, sans-serif; }}
    main {{
      min-height: 100vh; display: flex; align-items: center; justify-content: center;
      background: linear-gradient(135deg, #0ea5e9 0%, #22d3ee 100%); padding: 24px;
      box-sizing: border-box;
    }}
    .card {{
      width: 100%; max-width: 720px; background: white; border-radius: 16px;
      box-shadow: 0 20px 60px rgba(0,0,0,0.15); padding: 32px;
    }}
    h1 {{ font-size: 28px; margin: 0 0 8px; }}
    p.lead {{ color: #475569; margin-bottom: 24px; }}
    button {{
      background: #0ea5e9; color: white; border: 0; border-radius: 12px;
      padding: 12px 18px; font-size: 16px; cursor: pointer;
    }}
    button:disabled {{ opacity: 0.7; cursor: progress; }}
    #error {{ color: #ef4444; margin-top: 16px; }}
    .tip {{ margin-top: 24px; font-size: 12px; color: #64748b; }}
  </style>
</head>
<body>
<main>
  <div class="card">
    <h1>{title}</h1>
    <p class="lead">
      Download a pre-built Excel workbook with an interactive dashboard. Choose month and
      vendor inside Excel to view KPIs: On-time vs Delayed, Delay reasons, Truck types,
      Trucks used, and breakdown counts.
    </p>
    <button id="download" type="button">Download Excel Dashboard</button>
    <p id="error" hidden></p>
    <div class="tip">Tip: Open in modern Excel (Microsoft 365) for best dynamic formulas support.</div>
  </div>
</main>
<script>
  const button = document.getElementById("download");
  const errorLine = document.getElementById("error");
  const label = button.textContent;

  button.addEventListener("click", async () => {{
    button.disabled = true;
    button.textContent = "Generating\\u2026";
    errorLine.hidden = true;
    try {{
      const res = await fetch("{export_url}", {{ method: "GET" }});
      if (!res.ok) throw new Error("Failed to generate workbook");
      const blob = await res.blob();
      const url = URL.createObjectURL(blob);
      const a = document.createElement("a");
      a.href = url;
      a.download = "{filename}";
      document.body.appendChild(a);
      a.click();
      a.remove();
      URL.revokeObjectURL(url);
    }} catch (e) {{
      errorLine.textContent = (e && e.message) || "Unexpected error";
      errorLine.hidden = false;
    }} finally {{
      button.disabled = false;
      button.textContent = label;
    }}
  }});
</script>
</body>
</html>
"""


def render_index_page(
    title: str,
    export_url: str = "/api/export",
    filename: str = "Logistics_Dashboard.xlsx",
) -> str:
    """Render the download page HTML."""
    return _INDEX_TEMPLATE.format(
        title=escape(title),
        export_url=escape(export_url),
        filename=escape(filename),
    )
