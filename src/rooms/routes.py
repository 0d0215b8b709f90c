"""Room endpoints: list, create, join."""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from src.auth.dependencies import CurrentUser, get_current_user, get_optional_user
from src.rooms.schemas import CreateRoomRequest, JoinRoomResponse, RoomListResponse, RoomResponse
from src.rooms.service import create_room, join_room, list_rooms

router = APIRouter(prefix="/api/v1/rooms", tags=["Rooms"])


@router.get("", response_model=RoomListResponse, summary="List rooms", description="Public rooms, plus private rooms the caller belongs to, most recently active first.")
async def list_all(user: CurrentUser | None = Depends(get_optional_user)):
    rooms = list_rooms(user.id if user else None)
    return RoomListResponse(data=rooms, server_time=datetime.now(timezone.utc))


@router.post("", status_code=201, summary="Create a room", description="Create a public or private room. The creator joins it as admin.")
async def create(body: CreateRoomRequest, user: CurrentUser = Depends(get_current_user)):
    room = create_room(user.id, body.name, body.is_private)
    return {"status": "success", "data": RoomResponse.model_validate(room)}


@router.post("/{room_id}/join", response_model=JoinRoomResponse, summary="Join a room", description="Join a public room. Joining twice is a no-op.")
async def join(room_id: str, user: CurrentUser = Depends(get_current_user)):
    return JoinRoomResponse(data=join_room(room_id, user.id))
