"""
Fake OpenAI-compatible model server for exercising KimiVision without a key
or network access.

Answers POST /v1/chat/completions with a canned reply. REPLY_MODE selects it:
  json   (default) prose around a JSON object   -> strict JSON path
  text   labelled sections with bullets         -> scrape path
  junk   nothing recognizable                   -> placeholder path
  error  HTTP 500                               -> 422 from dishlens

Usage:
    python -m dishlens.scripts.fake_model_server                       (terminal 1)
    VISION_ADAPTER=kimi KIMI_API_KEY=fake \
      KIMI_API_URL=http://127.0.0.1:9000/v1/chat/completions \
      uvicorn dishlens.web.app:app --port 8000                         (terminal 2)
"""

import json
import os

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

app = FastAPI(title="fake-model-server")

REPLIES = {
    "json": "Sure! Here is the dish:\n" + json.dumps({
        "name": "Pad Thai",
        "region": "Thailand",
        "ingredients": ["Rice noodles", "Tamarind paste", "Fish sauce", "Peanuts", "Bean sprouts"],
        "instructions": ["Soak the noodles", "Stir-fry with sauce", "Top with peanuts"],
        "funFacts": ["Popularised in the 1930s and 40s as a national dish"],
    }),
    "text": (
        "Name: Shakshuka\nRegion: North Africa\n\nIngredients\n- Eggs\n- Tomatoes\n- Peppers\n\n"
        "Instructions\n1. Simmer the sauce\n2. Crack in the eggs\n3. Cover until set\n"
        "Fun Facts\n• Often eaten straight from the pan"
    ),
    "junk": "I'm sorry, the photo is too dark for me to tell what it is.",
}


def _completion(content: str) -> dict:
    return {
        "id": "chatcmpl-fake",
        "object": "chat.completion",
        "choices": [{"index": 0, "message": {"role": "assistant", "content": content}, "finish_reason": "stop"}],
    }


@app.post("/v1/chat/completions")
async def chat_completions(request: Request):
    body = await request.json()
    mode = os.getenv("REPLY_MODE", "json")
    parts = body["messages"][0]["content"]
    has_image = any(p.get("type") == "image_url" for p in parts)
    print(f"[model] model={body.get('model')} image={has_image} mode={mode}")
    if mode == "error":
        return JSONResponse(status_code=500, content={"error": {"message": "simulated outage"}})
    return _completion(REPLIES.get(mode, REPLIES["json"]))


if __name__ == "__main__":
    print("Fake model server starting on http://localhost:9000")
    uvicorn.run(app, host="0.0.0.0", port=9000)
