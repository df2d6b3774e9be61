"""WebSocket endpoint + HTML manager dashboard for live leads.

- GET /api/v1/dashboard/ → HTML dashboard
- WS  /api/v1/dashboard/ws → snapshot on connect, then live lead events

Client messages on the socket: "ping" → "pong";
{"action": "search", "term": "..."} → a fresh filtered snapshot.
"""

import json
import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect, Depends
from fastapi.responses import HTMLResponse

from leadhub.core.config import settings
from leadhub.services.board import LeadBoard
from leadhub.services.intake import LeadIntakeService, get_intake_service

router = APIRouter()
logger = logging.getLogger(__name__)


DASHBOARD_HTML = """<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="UTF-8">
<meta name="viewport" content="width=device-width, initial-scale=1.0">
<title>Manager Dashboard</title>
<style>
  * { margin: 0; padding: 0; box-sizing: border-box; }
  body { font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif; background: #0f172a; color: #e2e8f0; padding: 24px; }
  h1 { font-size: 1.5rem; color: #38bdf8; }
  .badge { display: inline-block; padding: 2px 8px; border-radius: 4px; font-size: 0.75rem; font-weight: 600; text-transform: uppercase; }
  .badge-emergency { background: #dc2626; color: #fff; }
  .badge-urgent { background: #f59e0b; color: #000; }
  .badge-normal { background: #334155; color: #e2e8f0; }
  .dot { display: inline-block; width: 8px; height: 8px; border-radius: 50%; margin-right: 6px; }
  .st-new { background: #3b82f6; } .st-contacted { background: #eab308; } .st-qualified { background: #22c55e; } .st-closed { background: #6b7280; }
  .cards { display: grid; grid-template-columns: repeat(4, 1fr); gap: 16px; margin: 16px 0; }
  .card { background: #1e293b; border-radius: 8px; padding: 16px; }
  .card .n { font-size: 1.6rem; font-weight: 700; }
  .toolbar { display: flex; gap: 8px; margin-bottom: 12px; }
  input, select, textarea { background: #1e293b; color: #e2e8f0; border: 1px solid #334155; border-radius: 4px; padding: 8px; }
  button { background: #334155; color: #e2e8f0; border: none; border-radius: 4px; padding: 8px 12px; cursor: pointer; }
  button.away { background: #dc2626; }
  table { width: 100%; border-collapse: collapse; }
  th { text-align: left; padding: 10px 12px; background: #1e293b; color: #94a3b8; font-size: 0.8rem; text-transform: uppercase; letter-spacing: 0.05em; }
  td { padding: 10px 12px; border-bottom: 1px solid #1e293b; font-size: 0.9rem; }
  tr:hover td { background: #1e293b; }
  .empty { text-align: center; padding: 40px; color: #64748b; }
  .live-dot { display: inline-block; width: 8px; height: 8px; background: #22c55e; border-radius: 50%; margin-right: 8px; animation: pulse 2s infinite; }
  @keyframes pulse { 0%, 100% { opacity: 1; } 50% { opacity: 0.4; } }
  .header { display: flex; align-items: center; justify-content: space-between; }
  .status { font-size: 0.8rem; color: #64748b; }
  #toast { position: fixed; bottom: 16px; right: 16px; background: #1e293b; padding: 12px 16px; border-radius: 6px; display: none; }
  #editor { position: fixed; inset: 0; background: rgba(0,0,0,0.5); display: none; align-items: center; justify-content: center; }
  #editor .box { background: #0f172a; padding: 20px; border-radius: 8px; width: 400px; display: grid; gap: 10px; }
</style>
</head>
<body>
<div class="header">
  <h1>Manager Dashboard</h1>
  <div>
    <span class="status"><span class="live-dot"></span><span id="ws-status">Connecting...</span></span>
    <button id="away-btn">Available</button>
  </div>
</div>
<div class="cards">
  <div class="card">Total Leads<div class="n" id="c-total">0</div></div>
  <div class="card">New Leads<div class="n" id="c-new">0</div></div>
  <div class="card">Qualified<div class="n" id="c-qualified">0</div></div>
  <div class="card">Total Value<div class="n" id="c-value">$0</div></div>
</div>
<div class="toolbar">
  <input id="search" placeholder="Search leads...">
  <button id="export-csv">Export CSV</button>
  <button id="copy-sheets">Copy for Sheets</button>
</div>
<table>
  <thead>
    <tr>
      <th>Name</th><th>Service</th><th>Contact</th><th>Urgency</th><th>Status</th><th>Value</th><th>Date</th><th></th>
    </tr>
  </thead>
  <tbody id="leads"></tbody>
</table>
<div id="editor"><div class="box">
  <strong id="ed-title"></strong>
  <select id="ed-status">
    <option value="new">New</option><option value="contacted">Contacted</option>
    <option value="qualified">Qualified</option><option value="closed">Closed</option>
  </select>
  <textarea id="ed-notes" rows="5" placeholder="Add notes about this lead..."></textarea>
  <div><button id="ed-cancel">Cancel</button> <button id="ed-save">Save Changes</button></div>
</div></div>
<div id="toast"></div>
<script>
const ROLE = "__ROLE__";
const tbody = document.getElementById('leads');
const wsStatus = document.getElementById('ws-status');
const search = document.getElementById('search');
let leads = [];
let editing = null;
let ws = null;

function esc(s) { const d = document.createElement('div'); d.textContent = s == null ? '' : s; return d.innerHTML; }
function toast(title, description) {
  const t = document.getElementById('toast');
  t.textContent = title + ' ' + description;
  t.style.display = 'block';
  setTimeout(() => { t.style.display = 'none'; }, 4000);
}
function renderRow(l) {
  return `<tr>
    <td>${esc(l.full_name)}</td>
    <td>${esc(l.service_needed)}</td>
    <td>${esc(l.phone)}<br>${esc(l.email)}</td>
    <td><span class="badge badge-${esc(l.urgency_level || 'normal')}">${esc(l.urgency_level || 'normal')}</span></td>
    <td><span class="dot st-${esc(l.status)}"></span>${esc(l.status)}</td>
    <td>$${l.lead_value || 0}</td>
    <td>${new Date(l.created_at).toLocaleDateString()}</td>
    <td><button data-id="${esc(l.id)}" class="edit">Edit</button></td>
  </tr>`;
}
function render() {
  tbody.innerHTML = leads.length ? leads.map(renderRow).join('')
    : '<tr><td colspan="8" class="empty">No leads yet</td></tr>';
  tbody.querySelectorAll('.edit').forEach(b => b.onclick = () => openEditor(b.dataset.id));
  fetch('/api/v1/leads/stats').then(r => r.json()).then(s => {
    document.getElementById('c-total').textContent = s.total;
    document.getElementById('c-new').textContent = s.new;
    document.getElementById('c-qualified').textContent = s.qualified;
    document.getElementById('c-value').textContent = '$' + s.total_value.toLocaleString();
  });
}
function openEditor(id) {
  editing = leads.find(l => l.id === id);
  if (!editing) return;
  document.getElementById('ed-title').textContent = 'Edit Lead: ' + editing.full_name;
  document.getElementById('ed-status').value = editing.status;
  document.getElementById('ed-notes').value = editing.notes || '';
  document.getElementById('editor').style.display = 'flex';
}
document.getElementById('ed-cancel').onclick = () => { editing = null; document.getElementById('editor').style.display = 'none'; };
document.getElementById('ed-save').onclick = async () => {
  const resp = await fetch('/api/v1/leads/' + editing.id, {
    method: 'PUT', headers: {'Content-Type': 'application/json'},
    body: JSON.stringify({status: document.getElementById('ed-status').value, notes: document.getElementById('ed-notes').value})
  });
  if (resp.ok) {
    toast('Updated', 'Lead information updated successfully');
    editing = null;
    document.getElementById('editor').style.display = 'none';
  } else {
    toast('Error', 'Failed to update lead');
  }
};
search.oninput = () => { if (ws) ws.send(JSON.stringify({action: 'search', term: search.value})); };
document.getElementById('export-csv').onclick = () => {
  window.location = '/api/v1/leads/export.csv?search=' + encodeURIComponent(search.value);
};
document.getElementById('copy-sheets').onclick = async () => {
  const text = await (await fetch('/api/v1/leads/export.tsv?search=' + encodeURIComponent(search.value))).text();
  await navigator.clipboard.writeText(text);
  toast('Copied to Clipboard!', 'Paste into Google Sheets (Ctrl+V)');
};
const awayBtn = document.getElementById('away-btn');
function renderAway(isAway) { awayBtn.textContent = isAway ? 'Away' : 'Available'; awayBtn.className = isAway ? 'away' : ''; }
fetch('/api/v1/profiles/' + ROLE).then(r => r.ok ? r.json() : null).then(p => { if (p) renderAway(p.is_away); });
awayBtn.onclick = async () => {
  const resp = await fetch('/api/v1/profiles/' + ROLE + '/away', {method: 'POST'});
  const data = await resp.json();
  if (resp.ok) { renderAway(data.profile.is_away); toast(data.notification.title, data.notification.description); }
  else { toast('Error', 'Failed to update away status'); }
};

function connectWS() {
  const proto = location.protocol === 'https:' ? 'wss:' : 'ws:';
  ws = new WebSocket(`${proto}//${location.host}/api/v1/dashboard/ws`);
  ws.onopen = () => { wsStatus.textContent = 'Live'; if (search.value) ws.send(JSON.stringify({action: 'search', term: search.value})); };
  ws.onclose = () => { wsStatus.textContent = 'Reconnecting...'; setTimeout(connectWS, 3000); };
  ws.onmessage = (e) => {
    const msg = JSON.parse(e.data);
    leads = msg.leads || leads;
    render();
    if (msg.event === 'insert') toast('New Lead!', msg.lead.full_name + ' - ' + msg.lead.service_needed);
  };
}
connectWS();
</script>
</body>
</html>"""


@router.get("/", response_class=HTMLResponse)
async def dashboard_page():
    """Serve the HTML lead dashboard."""
    return DASHBOARD_HTML.replace("__ROLE__", settings.AWAY_PROFILE_ROLE)


@router.websocket("/ws")
async def dashboard_ws(websocket: WebSocket, service: LeadIntakeService = Depends(get_intake_service)):
    await websocket.accept()

    async def push(message: dict):
        await websocket.send_json({**message, "leads": board.filtered})

    board = LeadBoard(service, on_event=push)
    await board.start()
    logger.info("Dashboard client connected (%d feed subscribers)", len(service.feed))
    try:
        await websocket.send_json({"event": "snapshot", "leads": board.filtered})
        while True:
            data = await websocket.receive_text()
            if data == "ping":
                await websocket.send_text("pong")
                continue
            try:
                message = json.loads(data)
            except ValueError:
                continue
            if isinstance(message, dict) and message.get("action") == "search":
                board.search = str(message.get("term") or "")
                await websocket.send_json({"event": "snapshot", "leads": board.filtered})
    except WebSocketDisconnect:
        pass
    finally:
        board.stop()
        logger.info("Dashboard client disconnected (%d feed subscribers)", len(service.feed))
