from flask import Flask, render_template_string
from primegen.api import primes_bp

PAGE = """<!doctype html><html><head>
<meta charset="utf-8"><meta name="viewport" content="width=device-width,initial-scale=1">
<title>primegen</title>
<style>
body{font-family:system-ui,-apple-system,Segoe UI,Roboto,Ubuntu,Helvetica,Arial,sans-serif;margin:0;background:#fafafa;color:#111}
.wrap{max-width:860px;margin:40px auto;padding:0 16px}
.card{background:#fff;border:1px solid #eee;border-radius:12px;padding:16px;margin:18px 0}
label{font-size:12px;color:#555}input,select,button{font-size:14px;padding:10px;border-radius:8px;border:1px solid #d0d0d0}
input{width:100%;box-sizing:border-box}button{background:#111;color:#fff;cursor:pointer}
.grid{display:grid;grid-template-columns:2fr 1fr 1fr;gap:10px}.mono{font-family:ui-monospace,Menlo,Consolas,monospace}
pre{white-space:pre-wrap;word-break:break-all;background:#f6f6f6;border:1px solid #eee;border-radius:8px;padding:10px}
</style></head><body><div class="wrap">
<h1>primegen</h1>
<div class="card">
  <h3>Primes from a starting bound</h3>
  <div class="grid">
    <div><label>Start</label><input id="p_start" class="mono" value="{{START}}"/></div>
    <div><label>Count</label><input id="p_count" value="10"/></div>
    <div><label>Domain</label><select id="p_domain"><option>big</option><option>u64</option></select></div>
  </div>
  <div style="margin-top:8px"><button id="p_go">Generate</button></div>
  <pre id="p_out">–</pre>
</div>
</div>
<script>
document.querySelector('#p_go').onclick=async()=>{
  const q=new URLSearchParams({start:document.querySelector('#p_start').value.trim(),
    count:document.querySelector('#p_count').value.trim(),domain:document.querySelector('#p_domain').value});
  const out=document.querySelector('#p_out');out.textContent='Working…';
  try{const r=await fetch('/api/primes?'+q);const j=await r.json();
    out.textContent=j.primes?j.primes.join('\\n'):JSON.stringify(j,null,2);}catch(e){out.textContent='Error: '+e;}};
</script></body></html>"""

def create_app() -> Flask:
    app = Flask(__name__)
    app.register_blueprint(primes_bp)

    @app.get("/")
    def home():
        return render_template_string(PAGE, START="18446744073713598463")

    return app

app = create_app()

if __name__ == "__main__":
    app.run("127.0.0.1", 8082, debug=True)
