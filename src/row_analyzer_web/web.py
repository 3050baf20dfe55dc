from __future__ import annotations
import argparse
import io
import logging
import threading

from flask import Flask, Response, jsonify, request

from row_analyzer import config as CFG
from row_analyzer.config import AnalysisConfig
from row_analyzer.engine import Engine, analyze
from row_analyzer.errors import AnalysisError, ConfigurationError

log = logging.getLogger(__name__)

app = Flask(__name__)
_engine: Engine | None = None
_engine_lock = threading.Lock()


def get_engine() -> Engine:
    global _engine
    with _engine_lock:
        if _engine is None:
            _engine = Engine()
        return _engine


# ---------- API ----------
@app.get("/api/health")
def api_health():
    eng = get_engine()
    return jsonify({"ok": True, "mode": eng.config.mode, "workers": eng.config.worker_count,
                    "page_size": eng.config.page_size})


@app.post("/api/analyze")
def api_analyze():
    upload = request.files.get("file")
    if upload is None or not upload.filename:
        return jsonify({"error": "no file uploaded (expected multipart field 'file')"}), 400

    raw_page_size = (request.form.get("page_size") or "").strip()
    try:
        page_size = int(raw_page_size) if raw_page_size else None
    except ValueError:
        return jsonify({"error": f"page_size must be an integer, got {raw_page_size!r}"}), 400

    eng = get_engine()
    try:
        cfg = eng.config.with_overrides(
            page_size=page_size,
            mode=request.form.get("mode") or None,
        )
    except ConfigurationError as e:
        return jsonify({"error": str(e)}), 400

    stream = io.BytesIO(upload.read())
    stream.name = upload.filename
    rows = request.form.get("rows", "0") == "1"
    try:
        result = eng.analyze(stream) if cfg == eng.config else analyze(stream, cfg)
    except AnalysisError as e:
        log.warning("analysis of %s failed: %s", upload.filename, e)
        return jsonify({"error": str(e)}), 422
    return jsonify(result.to_dict(include_rows=rows))


# ---------- UI ----------
@app.get("/")
def home():
    html = r"""
<!doctype html>
<html lang="en">
<head>
<meta charset="utf-8" />
<meta name="viewport" content="width=device-width,initial-scale=1" />
<title>Row Length Analyzer</title>
<style>
:root{ --bg:#0b0f14; --panel:#0f141b; --ink:#cfd8e3; --muted:#8a94a6; --accent:#6ee7ff; --border:#1c2530; }
*{box-sizing:border-box}
body{ margin:0; background:var(--bg); color:var(--ink);
  font:16px/1.45 system-ui,-apple-system,Segoe UI,Roboto,Ubuntu,"Helvetica Neue",Arial; }
.container{ max-width:980px; margin:24px auto; padding:0 16px; }
.card{ background:var(--panel); border:1px solid var(--border); border-radius:16px; padding:18px; }
h1{ font-size:20px; margin:0 0 8px 0 }
.controls{ display:flex; gap:12px; align-items:center; flex-wrap:wrap; margin:12px 0 }
.btn{ padding:10px 14px; border-radius:10px; border:1px solid var(--border); background:#0b1117; color:var(--ink); cursor:pointer }
.btn:hover{ border-color:var(--accent) }
pre{ background:#0b1117; border:1px solid var(--border); border-radius:12px; padding:12px; overflow:auto; color:var(--muted) }
</style>
</head>
<body>
  <div class="container">
    <div class="card">
      <h1>Row Length Analyzer</h1>
      <form id="f" class="controls">
        <input id="file" name="file" type="file" />
        <label>Page size <input name="page_size" type="number" min="1" placeholder="3000" /></label>
        <select name="mode"><option value="">default mode</option><option>parallel</option><option>streaming</option></select>
        <button class="btn" type="submit">Analyze</button>
      </form>
      <pre id="out">Choose a file to analyze.</pre>
    </div>
  </div>
<script>
const f = document.querySelector("#f"), out = document.querySelector("#out");
f.addEventListener("submit", async (ev)=>{
  ev.preventDefault();
  out.textContent = "Analyzing…";
  try{
    const resp = await fetch("/api/analyze", {method:"POST", body:new FormData(f)});
    const data = await resp.json();
    out.textContent = JSON.stringify(data, null, 2);
  }catch(e){
    out.textContent = `Error: ${e.message ?? e}`;
  }
});
</script>
</body>
</html>
"""
    return Response(html, mimetype="text/html")


def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Run Flask UI on top of the row-length Engine")
    ap.add_argument("--page-size", type=int, default=None)
    ap.add_argument("--workers", type=int, default=None)
    ap.add_argument("--mode", choices=list(CFG.MODES), default=None)
    ap.add_argument("--host", default="127.0.0.1")
    ap.add_argument("--port", type=int, default=8000)
    ap.add_argument("--verbose", action="store_true")
    args = ap.parse_args(argv)

    try:
        cfg = AnalysisConfig().with_overrides(
            page_size=args.page_size, worker_count=args.workers, mode=args.mode,
        )
    except ConfigurationError as e:
        ap.error(str(e))

    global _engine
    _engine = Engine(cfg, verbose=args.verbose)
    try:
        app.run(host=args.host, port=args.port, debug=args.verbose)
    finally:
        _engine.shutdown()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
