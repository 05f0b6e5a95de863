"""
Demo Backend Script

Runs a throwaway in-memory blog backend so the page server can be
tried locally without the real service:

    python demo.py                 # backend on http://127.0.0.1:8001
    crypto-blog                    # page on http://127.0.0.1:8000

Posts live only as long as this process.
"""

import argparse
import itertools
import time
from typing import List

import uvicorn
from fastapi import APIRouter, FastAPI
from pydantic import BaseModel


class PostCreate(BaseModel):
    title: str
    body: str
    author: str


class PostResponse(BaseModel):
    id: int
    title: str
    body: str
    author: str
    timestamp: int


router = APIRouter()
_posts: List[PostResponse] = []
_ids = itertools.count(1)


@router.get("/posts", response_model=List[PostResponse])
async def list_posts():
    return _posts


@router.post("/posts", response_model=PostResponse)
async def create_post(post: PostCreate):
    created = PostResponse(id=next(_ids), timestamp=time.time_ns(), **post.model_dump())
    _posts.append(created)
    return created


app = FastAPI(title="Crypto Blog Demo Backend")
app.include_router(router)


def main():
    parser = argparse.ArgumentParser(description="Run the in-memory demo backend")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8001)
    args = parser.parse_args()

    print("=" * 60)
    print("Crypto Blog Demo Backend")
    print(f"Listening on http://{args.host}:{args.port}")
    print("=" * 60)
    uvicorn.run(app, host=args.host, port=args.port)


if __name__ == "__main__":
    main()
