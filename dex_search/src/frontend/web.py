from __future__ import annotations
import argparse
from flask import Flask, request, jsonify, Response
from dexsearch.engine import Engine
from dexsearch.config import DEFAULT_DSN
from dexsearch.models import row_to_json

app = Flask(__name__)
_engine: Engine | None = None


def _filters_from_args() -> list[tuple[str, str]]:
    out = []
    for raw in request.args.getlist("filter"):
        dim, sep, value = raw.partition(":")
        if not sep or not value:
            raise ValueError(f"filter must look like dimension:value, got {raw!r}")
        out.append((dim, value))
    return out

# ---------- API ----------
@app.get("/api/search")
def api_search():
    if _engine is None or _engine.index is None:
        return jsonify({"error": "engine not initialized"}), 503
    q = request.args.get("q", "", type=str)
    try:
        ds = _engine.searcher(
            request.args.get("type", "", type=str),
            request.args.get("format", "", type=str),
            request.args.get("species", "", type=str),
        )
        for f in _filters_from_args():
            if not ds.add_filter(f):
                raise ValueError(f"filter {f[0]!r} is not supported for this search type")
        sort = request.args.get("sort", None, type=str)
        if sort:
            ds.toggle_sort(sort)
            if request.args.get("reverse", "", type=str) in ("1", "true"):
                ds.toggle_sort(sort)
        ds.find(q)
    except (ValueError, KeyError) as e:
        return jsonify({"error": str(e)}), 400
    rows = []
    for row in ds.results or []:
        r = row_to_json(row)
        if r["kind"] == "entry":
            r["name"] = ds.display_name(row)
            label = ds.illegal_label(r["id"])
            if label:
                r["illegal"] = label
        rows.append(r)
    return jsonify({"query": ds.query, "exact_match": ds.exact_match, "rows": rows})

@app.get("/api/health")
def api_health():
    ready = _engine is not None and _engine.index is not None
    return jsonify({"ok": ready, "entries": len(_engine.index) if ready else 0}), (200 if ready else 503)

# ---------- UI ----------
@app.get("/")
def home():
    # A tiny page: CSS variables + minimal JS, no external deps.
    html = r"""
<!doctype html>
<html lang="en">
<head>
<meta charset="utf-8" />
<meta name="viewport" content="width=device-width,initial-scale=1" />
<title>Dex Search • Flask UI</title>
<style>
:root{
  --bg:#0b0f14; --panel:#0f141b; --ink:#cfd8e3; --muted:#8a94a6;
  --accent:#6ee7ff; --accent-2:#22d3ee; --border:#1c2530; --danger:#ff5d5d;
  --mark-bg:rgba(110,231,255,.2);
}
*{box-sizing:border-box}
body{
  margin:0; background:var(--bg); color:var(--ink);
  font:16px/1.45 system-ui,-apple-system,Segoe UI,Roboto,Ubuntu,"Helvetica Neue",Arial;
}
.container{ max-width:880px; margin:24px auto; padding:0 16px; }
.card{
  background:var(--panel); border:1px solid var(--border);
  border-radius:16px; padding:18px; box-shadow:0 10px 30px rgba(0,0,0,.25);
}
h1{ font-size:20px; margin:0 0 8px 0; letter-spacing:.3px; }
.controls{ display:flex; gap:12px; align-items:center; margin:12px 0 4px 0; flex-wrap:wrap; }
.controls input, .controls select{
  padding:10px 12px; border-radius:12px; border:1px solid var(--border);
  background:#0b1117; color:var(--ink); outline:none; font-size:15px;
}
#q{ flex:1; min-width:220px }
.meta{ color:var(--muted); font-size:13px; margin-top:6px; }
.err{
  display:none; margin-top:12px; padding:10px 12px; border-radius:10px;
  background:rgba(255,93,93,.12); border:1px solid rgba(255,93,93,.35); color:#ffb0b0;
}
.results{ margin-top:16px; border-radius:12px; border:1px solid var(--border); }
.row{ padding:8px 14px; border-top:1px solid var(--border); display:flex; gap:12px }
.row:first-child{ border-top:none }
.head{ background:#0d131a; font-weight:600; color:var(--muted) }
.cat{ color:var(--muted); width:6rem; font-size:13px }
.illegal{ color:var(--danger); font-size:12px }
.mark{ background:var(--mark-bg); border-bottom:1px solid var(--accent-2) }
.empty{ padding:24px; text-align:center; color:var(--muted); }
</style>
</head>
<body>
  <div class="container">
    <div class="card">
      <h1>Dex Search</h1>
      <div class="controls">
        <input id="q" type="text" placeholder="Search Pokémon, moves, items…" autocomplete="off" autofocus />
        <select id="type">
          <option value="">any</option><option>species</option><option>move</option>
          <option>item</option><option>ability</option><option>type</option><option>category</option>
        </select>
        <input id="format" type="text" placeholder="format (gen9ou)" size="12" />
        <input id="species" type="text" placeholder="species" size="12" />
      </div>
      <div class="meta" id="stats">Ready.</div>
      <div id="err" class="err"></div>
      <div class="results"><div id="out" class="empty">Start typing to see results.</div></div>
    </div>
  </div>
<script>
const $ = (s) => document.querySelector(s);
const q = $("#q"), type = $("#type"), format = $("#format"), species = $("#species");
const out = $("#out"), err = $("#err"), stats = $("#stats");
let t;
function esc(s){ return String(s).replace(/[&<>"]/g, c => ({"&":"&amp;","<":"&lt;",">":"&gt;",'"':"&quot;"}[c])); }
function entry(r){
  const n = r.name || r.id;
  let name = esc(n);
  if(r.match_end > r.match_start){
    name = esc(n.slice(0, r.match_start)) + `<span class="mark">${esc(n.slice(r.match_start, r.match_end))}</span>` + esc(n.slice(r.match_end));
  }
  const bad = r.illegal ? ` <span class="illegal">${esc(r.illegal)}</span>` : "";
  return `<div class="row"><span class="cat">${esc(r.category)}</span><span>${name}${bad}</span></div>`;
}
async function search(){
  const params = new URLSearchParams({q: q.value, type: type.value, format: format.value, species: species.value});
  err.style.display = "none";
  try{
    const resp = await fetch(`/api/search?${params}`);
    const data = await resp.json();
    if(!resp.ok) throw new Error(data.error || `HTTP ${resp.status}`);
    stats.textContent = `Rows: ${data.rows.length}${data.exact_match ? " • exact match" : ""}`;
    if(!data.rows.length){ out.className = "empty"; out.innerHTML = "No matches."; return; }
    out.className = "";
    out.innerHTML = data.rows.map(r =>
      r.kind === "header" ? `<div class="row head">${esc(r.text)}</div>` :
      r.kind === "html" ? `<div class="row">${r.markup}</div>` :
      r.kind === "sort" ? "" : entry(r)).join("");
  }catch(e){
    err.style.display = "block";
    err.textContent = `Error: ${e.message ?? e}`;
  }
}
function debounced(){ clearTimeout(t); t = setTimeout(search, 150); }
[q, format, species].forEach(el => el.addEventListener("input", debounced));
type.addEventListener("change", debounced);
</script>
</body>
</html>
"""
    return Response(html, mimetype="text/html")

def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Run Flask UI on top of Engine")
    ap.add_argument("--db", dest="db", default=DEFAULT_DSN)  # DSN: memory://sample, json:///path, sqlite:///path
    ap.add_argument("--host", default="127.0.0.1")
    ap.add_argument("--port", type=int, default=8000)
    ap.add_argument("--verbose", action="store_true")
    args = ap.parse_args(argv)

    global _engine
    _engine = Engine()
    _engine.load(dsn=args.db, verbose=args.verbose)

    try:
        app.run(host=args.host, port=args.port, debug=args.verbose)
    finally:
        _engine.shutdown()
    return 0

if __name__ == "__main__":
    raise SystemExit(main())
