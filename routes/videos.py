import re
from typing import Optional

from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile, status
from pymongo import DESCENDING
from pymongo.database import Database

from database import (
    create_document,
    delete_document,
    get_db,
    get_document,
    get_documents,
    paginate,
    to_serializable,
    update_document,
)
from schemas import Video, VideoCategory, VideoUpdate
from security import require_admin
from uploads import UploadStore, get_upload_store

router = APIRouter(prefix="/videos", tags=["Videos"])

COLLECTION = "video"
NEWEST_FIRST = [("created_at", DESCENDING)]


@router.get("")
def list_videos(
    category: Optional[VideoCategory] = None,
    featured: Optional[bool] = None,
    is_public: Optional[bool] = None,
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    db: Database = Depends(get_db),
):
    filt = {}
    if category:
        filt["category"] = category
    if featured is not None:
        filt["featured"] = featured
    if is_public is not None:
        filt["is_public"] = is_public
    videos, pagination = paginate(db, COLLECTION, filt, NEWEST_FIRST, page, limit)
    return {"videos": videos, "pagination": pagination}


@router.get("/featured")
def list_featured_videos(limit: int = Query(6, ge=1, le=50), db: Database = Depends(get_db)):
    return get_documents(db, COLLECTION, {"featured": True, "is_public": True}, sort=NEWEST_FIRST, limit=limit)


@router.get("/category/{category}")
def list_videos_by_category(
    category: VideoCategory,
    page: int = Query(1, ge=1),
    limit: int = Query(12, ge=1, le=100),
    db: Database = Depends(get_db),
):
    videos, pagination = paginate(
        db, COLLECTION, {"category": category, "is_public": True}, NEWEST_FIRST, page, limit
    )
    return {"videos": videos, "pagination": pagination}


@router.get("/search")
def search_videos(
    q: Optional[str] = None,
    category: Optional[VideoCategory] = None,
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    db: Database = Depends(get_db),
):
    filt = {"is_public": True}
    if category:
        filt["category"] = category
    if q:
        filt["$or"] = [
            {"title": {"$regex": re.escape(q), "$options": "i"}},
            {"description": {"$regex": re.escape(q), "$options": "i"}},
            {"tags": {"$regex": re.escape(q), "$options": "i"}},
        ]
    videos, pagination = paginate(db, COLLECTION, filt, NEWEST_FIRST, page, limit)
    return {"videos": videos, "pagination": pagination}


@router.get("/{video_id}")
def get_video(video_id: str, db: Database = Depends(get_db)):
    """Return the video and count the view."""
    video = get_document(db, COLLECTION, video_id, label="Video")
    db[COLLECTION].update_one({"_id": video["_id"]}, {"$inc": {"views": 1}})
    video["views"] = video.get("views", 0) + 1
    return to_serializable(video)


@router.post("/upload/thumbnail", dependencies=[Depends(require_admin)])
async def upload_thumbnail(thumbnail: UploadFile = File(...), store: UploadStore = Depends(get_upload_store)):
    content_type = thumbnail.content_type or ""
    folder = "videos" if content_type.startswith("video/") else "images"
    image_path = await store.save(thumbnail, folder, allowed=("image/", "video/"))
    return {
        "message": "Thumbnail uploaded successfully",
        "image_path": image_path,
        "thumbnail_type": "video" if folder == "videos" else "image",
        "success": True,
    }


@router.post("/upload/video", dependencies=[Depends(require_admin)])
async def upload_video_file(video: UploadFile = File(...), store: UploadStore = Depends(get_upload_store)):
    video_path = await store.save(video, "videos", allowed=("video/",))
    return {"message": "Video uploaded successfully", "video_path": video_path, "success": True}


@router.post("", status_code=status.HTTP_201_CREATED, dependencies=[Depends(require_admin)])
def create_video(payload: Video, db: Database = Depends(get_db)):
    doc = create_document(db, COLLECTION, payload)
    return {"message": "Video created successfully", "video": to_serializable(doc)}


@router.put("/{video_id}", dependencies=[Depends(require_admin)])
def update_video(video_id: str, payload: VideoUpdate, db: Database = Depends(get_db)):
    current = get_document(db, COLLECTION, video_id, label="Video")
    merged = {**current, **payload.model_dump(exclude_unset=True)}
    if not merged.get("video_file") and not merged.get("video_url"):
        raise HTTPException(status_code=400, detail="Either video file or video URL must be provided")
    doc = update_document(db, COLLECTION, video_id, payload, label="Video")
    return {"message": "Video updated successfully", "video": to_serializable(doc)}


@router.delete("/{video_id}", dependencies=[Depends(require_admin)])
def delete_video(video_id: str, db: Database = Depends(get_db)):
    delete_document(db, COLLECTION, video_id, label="Video")
    return {"message": "Video deleted successfully"}
