from __future__ import annotations

from io import BytesIO

from flask import Flask, Response, flash, redirect, render_template_string, request, send_file

from number_bingo.config import Settings, load_settings
from number_bingo.core.generator import FREE, LETTERS, Card, generate_card, generate_cards
from number_bingo.core.parser import (
    DEFAULT_TITLE,
    InvalidCard,
    card_to_token,
    export_filename,
    parse_card_count,
    parse_card_token,
    parse_export_request,
)
from number_bingo.core.pdf import AssetError, RenderOptions, render_cards_pdf


HTML = """
<!doctype html>
<html lang="en">
  <head>
    <meta charset="utf-8">
    <meta name="viewport" content="width=device-width, initial-scale=1">
    <title>Bingo Card Generator</title>
    <style>
      body { font-family: system-ui, -apple-system, Segoe UI, Roboto, sans-serif; margin: 24px; max-width: 920px; }
      h1 { margin: 0 0 8px; }
      .hint { color: #333; margin: 0 0 16px; }
      label { display: block; font-weight: 600; margin: 12px 0 6px; }
      input[type="text"], input[type="number"] { width: 100%; padding: 10px; border: 1px solid #111; border-radius: 6px; }
      .row { display: grid; grid-template-columns: 1fr 1fr; gap: 12px; }
      .btn { margin-top: 14px; padding: 10px 14px; border: 2px solid #111; border-radius: 10px; background: #fff; font-weight: 700; cursor: pointer; }
      .box { border: 2px solid #111; border-radius: 12px; padding: 14px; }
      .flash { margin: 10px 0; padding: 10px 12px; border: 1px solid #111; border-radius: 8px; }
      .small { font-size: 12px; color: #333; }
      .card { display: grid; grid-template-columns: repeat(5, 64px); gap: 0; margin-top: 18px; width: max-content; }
      .card .header { grid-column: 1 / span 5; text-align: center; font-size: 24px; font-weight: 700; margin-bottom: 8px; }
      .card .letter { text-align: center; font-size: 20px; font-weight: 700; padding: 4px 0; }
      .card .cell { height: 64px; display: flex; align-items: center; justify-content: center; border: 1px solid #111; font-size: 20px; font-weight: 700; }
      .card .free-space { background: #328CF8; color: #fff; }
    </style>
  </head>
  <body>
    <h1>Bingo Card Generator</h1>
    <p class="hint">Set a title, choose whether to include a free space, and download a PDF with one card per page.</p>

    {% with messages = get_flashed_messages() %}
      {% if messages %}
        {% for msg in messages %}
          <div class="flash">{{ msg }}</div>
        {% endfor %}
      {% endif %}
    {% endwith %}

    <form class="box" id="bingo-form" method="post" action="/preview">
      <input type="hidden" name="card" value="{{ card_token }}">
      <div class="row">
        <div>
          <label>Title</label>
          <input type="text" id="title" name="title" value="{{ title }}" placeholder="{{ default_title }}">
        </div>
        <div>
          <label>Number of cards</label>
          <input type="number" name="count" value="{{ count }}" min="1" max="{{ max_cards }}" step="1">
          <div class="small">Each page is one A4 card.</div>
        </div>
      </div>

      <div class="row">
        <div>
          <label>Seed (optional, for reproducible PDFs)</label>
          <input type="number" name="seed" placeholder="e.g. 12345">
        </div>
        <div>
          <label><input type="checkbox" id="free_space" name="free_space" value="1" {% if free_space %}checked{% endif %}> Include free space</label>
        </div>
      </div>

      <button class="btn" type="submit">Update preview</button>
      <button class="btn" type="submit" name="action" value="new">New numbers</button>
      <button class="btn" type="submit" formaction="/generate">Download PDF</button>
    </form>

    <div class="card" id="card-preview">
      <div class="header">{{ title or default_title }}</div>
      {% for letter in letters %}<div class="letter">{{ letter }}</div>{% endfor %}
      {% for row in rows %}
        {% for value in row %}
          {% if value == free %}
            <div class="cell free-space">{{ free }}</div>
          {% else %}
            <div class="cell">{{ value }}</div>
          {% endif %}
        {% endfor %}
      {% endfor %}
    </div>

    <script>
      // Title edits only touch the header; numbers stay put.
      document.getElementById("title").addEventListener("input", function (e) {
        document.querySelector("#card-preview .header").textContent = e.target.value || "{{ default_title }}";
      });
      document.getElementById("free_space").addEventListener("change", function () {
        document.getElementById("bingo-form").submit();
      });
    </script>
  </body>
</html>
"""


app = Flask(__name__)
app.config["BINGO_SETTINGS"] = load_settings()
app.secret_key = app.config["BINGO_SETTINGS"].secret_key


def _settings() -> Settings:
    return app.config["BINGO_SETTINGS"]


def _free_space_from_form() -> bool:
    return bool(request.form.get("free_space"))


def _render_preview(card: Card, *, title: str, free_space: bool, count: int) -> str:
    return render_template_string(
        HTML,
        card_token=card_to_token(card),
        rows=card.rows,
        letters=LETTERS,
        free=FREE,
        title=title,
        default_title=DEFAULT_TITLE,
        free_space=free_space,
        count=count,
        max_cards=_settings().max_cards,
    )


def _current_card(token: str | None, *, free_space: bool, regenerate: bool) -> Card:
    if token and not regenerate:
        try:
            return parse_card_token(token, include_free_space=free_space)
        except InvalidCard as e:
            app.logger.debug("Regenerating preview card: %s", e)
    return generate_card(free_space)


@app.get("/")
def index() -> str:
    return _render_preview(generate_card(True), title="", free_space=True, count=1)


@app.post("/preview")
def preview() -> str:
    free_space = _free_space_from_form()
    card = _current_card(
        request.form.get("card"),
        free_space=free_space,
        regenerate=request.form.get("action") == "new",
    )
    title = (request.form.get("title") or "").strip()
    count = parse_card_count(request.form.get("count"), maximum=_settings().max_cards)
    return _render_preview(card, title=title, free_space=free_space, count=count)


@app.post("/generate")
def generate() -> Response:
    settings = _settings()
    try:
        export = parse_export_request(
            title=request.form.get("title"),
            free_space=_free_space_from_form(),
            count=request.form.get("count"),
            seed=request.form.get("seed"),
            max_cards=settings.max_cards,
        )
    except ValueError:
        flash("Seed must be a whole number.")
        return redirect("/")

    cards = generate_cards(
        count=export.count,
        include_free_space=export.include_free_space,
        seed=export.seed,
    )

    opts = RenderOptions(
        title=export.title,
        font_regular=settings.font_regular,
        font_bold=settings.font_bold,
        logo_path=settings.logo_path,
        qr_url=settings.qr_url,
        qr_image_path=settings.qr_image_path,
    )
    try:
        pdf_bytes = render_cards_pdf(cards, opts)
    except AssetError as e:
        app.logger.error("PDF export failed: %s", e)
        flash(f"{e}. Please try again.")
        return redirect("/")

    app.logger.info("Exported %d card(s) titled %r", export.count, export.title)
    return send_file(
        BytesIO(pdf_bytes),
        mimetype="application/pdf",
        as_attachment=True,
        download_name=export_filename(export.title),
    )


if __name__ == "__main__":
    app.run(host="127.0.0.1", port=5000, debug=True)
