#!/usr/bin/env python3
"""
Browser projector for the encoder-decoder simulation.

Each WebSocket connection gets its own SimulationEngine. The page sends control
messages and redraws whenever the server pushes a new snapshot.

Usage:
    python demo/web.py
    seq2seq-viz demo --port 8000

Then open http://localhost:8000 in your browser.

Messages (browser -> server):
    {"action": "start", "text": "...", "source": "en", "target": "hi"}
    {"action": "reset"} | {"action": "toggle_pause"} | {"action": "step"}
    {"action": "speed", "value": 800}
    {"action": "swap"} | {"action": "languages", "source": "en", "target": "mr"}
"""

import asyncio
import logging
from typing import Annotated

import typer
import uvicorn
from fastapi import FastAPI, WebSocket, WebSocketDisconnect
from fastapi.responses import HTMLResponse

from seq2seq_viz import Language, SimulationConfig, SimulationEngine, SimulationSnapshot

logger = logging.getLogger(__name__)

app = FastAPI(title="Seq2Seq Visualizer")

HTML_PAGE = """
<!DOCTYPE html>
<html>
<head>
    <title>Seq2Seq Visualizer</title>
    <style>
        * { box-sizing: border-box; }
        body {
            font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif;
            margin: 30px auto; max-width: 1100px; padding: 20px;
            background: #0d1117; color: #e6edf3;
        }
        .controls, .viz { background: #161b22; border-radius: 12px; padding: 20px; margin-bottom: 20px; }
        textarea, select { background: #0d1117; color: #e6edf3; border: 1px solid #30363d; border-radius: 6px; padding: 8px; }
        textarea { width: 100%; }
        button { padding: 10px 20px; border: none; border-radius: 8px; cursor: pointer; margin: 5px 5px 5px 0;
                 background: #00b8d4; color: #0d1117; font-weight: 600; }
        button.secondary { background: #30363d; color: #e6edf3; }
        button:disabled { opacity: 0.4; cursor: not-allowed; }
        .error { background: #3d1518; color: #ff7b72; padding: 10px; border-radius: 6px; margin-top: 10px; }
        .phase { font-size: 20px; margin-bottom: 15px; color: #00e5ff; }
        .columns { display: grid; grid-template-columns: 1fr auto 1fr; gap: 30px; }
        .token { display: flex; align-items: center; gap: 10px; padding: 6px; border-radius: 6px; }
        .token.active { background: rgba(0, 229, 255, 0.12); }
        .vector { display: grid; grid-template-columns: repeat(5, 10px); }
        .vector span { width: 10px; height: 10px; }
        .hidden { opacity: 0.3; }
    </style>
</head>
<body>
    <div class="controls">
        <select id="source"></select>
        <button class="secondary" id="swapBtn" onclick="send({action: 'swap'})">&#8646;</button>
        <select id="target"></select>
        <p><textarea id="text" rows="2">how are you</textarea></p>
        <button id="startBtn" onclick="start()">Translate &amp; Visualize</button>
        <button class="secondary" id="resetBtn" onclick="send({action: 'reset'})">Reset</button>
        <span id="simControls">
            <button class="secondary" id="playBtn" onclick="send({action: 'toggle_pause'})">Play</button>
            <button class="secondary" id="stepBtn" onclick="send({action: 'step'})">Next Step</button>
            <label>Speed <input type="range" id="speed" min="200" max="2000" step="100"
                onchange="send({action: 'speed', value: Number(this.value)})"> <span id="speedLabel"></span></label>
        </span>
        <div id="final"></div>
        <div id="error"></div>
    </div>
    <div class="viz">
        <div class="phase" id="phase">Connecting...</div>
        <div class="columns">
            <div><h3>Encoder</h3><div id="encoder"></div></div>
            <div><h3>Context</h3><div id="context"></div></div>
            <div><h3>Decoder</h3><div id="decoder"></div></div>
        </div>
    </div>
    <script>
        const LANGS = __LANGUAGES__;
        const ws = new WebSocket(`ws://${location.host}/ws`);
        const $ = (id) => document.getElementById(id);
        for (const sel of [$('source'), $('target')]) {
            for (const [code, name] of LANGS) sel.add(new Option(name, code));
            sel.onchange = () => send({action: 'languages', source: $('source').value, target: $('target').value});
        }
        function send(msg) { ws.send(JSON.stringify(msg)); }
        function start() {
            send({action: 'start', text: $('text').value, source: $('source').value, target: $('target').value});
        }
        function escapeHtml(text) {
            return String(text).replace(/[&<>"']/g, c => ({'&': '&amp;', '<': '&lt;', '>': '&gt;', '"': '&quot;', "'": '&#39;'})[c]);
        }
        function color(v) { return `hsl(${190 - v * 110}, 90%, ${35 + v * 30}%)`; }
        function vector(values) {
            return '<div class="vector">' + values.map(v => `<span style="background:${color(v)}"></span>`).join('') + '</div>';
        }
        function row(token, values, active, hidden, reverse) {
            const cls = 'token' + (active ? ' active' : '') + (hidden ? ' hidden' : '');
            const parts = [`<b>${escapeHtml(token)}</b>`, '&rarr;', vector(values)];
            return `<div class="${cls}">${(reverse ? parts.reverse() : parts).join('')}</div>`;
        }
        ws.onmessage = (event) => {
            const s = JSON.parse(event.data);
            $('phase').textContent = s.description;
            $('source').value = s.languages.source;
            $('target').value = s.languages.target;
            const locked = !s.controls.swap;
            $('source').disabled = $('target').disabled = $('swapBtn').disabled = $('text').disabled = locked;
            $('startBtn').disabled = !s.controls.start;
            $('startBtn').textContent = s.phase === 'translating' ? 'Simulating...' : 'Translate & Visualize';
            $('resetBtn').style.display = s.phase === 'idle' ? 'none' : '';
            $('simControls').style.display = s.controls.visible ? '' : 'none';
            $('playBtn').textContent = s.is_paused ? 'Play' : 'Pause';
            $('playBtn').disabled = !s.controls.toggle_pause;
            $('stepBtn').disabled = !s.controls.step;
            $('speed').value = s.animation_speed;
            $('speed').disabled = !s.controls.speed;
            $('speedLabel').textContent = (s.animation_speed / 1000).toFixed(1) + 's';
            if (s.phase === 'idle' && s.input_text) $('text').value = s.input_text;
            $('final').innerHTML = s.translated_text ? `<p><b>Final Translation:</b> ${escapeHtml(s.translated_text)}</p>` : '';
            $('error').innerHTML = s.error ? `<div class="error">${escapeHtml(s.error)}</div>` : '';
            $('encoder').innerHTML = s.input_tokens.map((t, i) =>
                row(t, s.input_vectors[i], s.active_input_index === i, false, false)).join('');
            $('context').innerHTML = s.context_vector ? vector(s.context_vector) : '';
            $('decoder').innerHTML = s.output_tokens.map((t, i) =>
                row(t, s.output_vectors[i], s.active_output_index === i, t === '?', true)).join('');
        };
        ws.onclose = () => { $('phase').textContent = 'Disconnected'; };
    </script>
</body>
</html>
"""


def render_page() -> str:
    languages = ", ".join(f'["{lang.value}", "{lang.display_name}"]' for lang in Language)
    return HTML_PAGE.replace("__LANGUAGES__", f"[{languages}]")


def handle_message(engine: SimulationEngine, message: dict) -> "asyncio.Task | None":
    """Apply one control message. Starting a translation returns the in-flight task."""
    action = message.get("action")
    if action == "start":
        return asyncio.create_task(
            engine.start_translation(
                str(message.get("text", "")), message.get("source"), message.get("target")
            )
        )
    if action == "reset":
        engine.reset()
    elif action == "toggle_pause":
        engine.toggle_pause()
    elif action == "step":
        engine.step()
    elif action == "speed":
        engine.set_speed(float(message.get("value", engine.config.default_speed_ms)))
    elif action == "swap":
        engine.swap_languages()
    elif action == "languages":
        engine.set_languages(message["source"], message["target"])
    else:
        logger.warning(f"Unknown action: {action!r}")
    return None


@app.get("/")
async def get_index():
    return HTMLResponse(render_page())


@app.websocket("/ws")
async def websocket_endpoint(websocket: WebSocket):
    await websocket.accept()

    outbox: asyncio.Queue = asyncio.Queue()

    def on_snapshot(snapshot: SimulationSnapshot) -> None:
        outbox.put_nowait(snapshot.to_dict())

    engine = SimulationEngine(config=SimulationConfig.from_env(), on_snapshot=on_snapshot)
    outbox.put_nowait(engine.snapshot.to_dict())

    async def pump():
        while True:
            await websocket.send_json(await outbox.get())

    sender = asyncio.create_task(pump())
    translations: set = set()

    try:
        while True:
            message = await websocket.receive_json()
            try:
                task = handle_message(engine, message)
            except (KeyError, ValueError) as e:
                logger.warning(f"Bad message {message!r}: {e}")
                continue
            if task is not None:
                translations.add(task)
                task.add_done_callback(translations.discard)
    except WebSocketDisconnect:
        logger.info("Client disconnected")
    finally:
        engine.close()
        sender.cancel()
        for task in translations:
            task.cancel()


def main(
    host: Annotated[str, typer.Option("--host", help="Server host")] = "0.0.0.0",
    port: Annotated[int, typer.Option("--port", "-p", help="Server port")] = 8000,
):
    """Launch the browser visualizer."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    if not SimulationConfig.from_env().has_credential:
        logger.warning("GEMINI_API_KEY is not set; translations will be refused")

    print(f"\nStarting server at http://localhost:{port}\n")
    uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    typer.run(main)
