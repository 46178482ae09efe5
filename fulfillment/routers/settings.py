from typing import Optional

from fastapi import APIRouter, Depends, Header, HTTPException, status
from sqlalchemy.orm import Session

from fulfillment.config import settings
from fulfillment.database import get_db
from fulfillment.schemas.settings import (
    SettingItem,
    SettingsResponse,
    SettingUpdateRequest,
    SettingUpdateResponse,
)
from fulfillment.services.mapping_parser import parse_mapping
from fulfillment.services.result import PARSE_ERROR
from fulfillment.services.settings_service import CITY_MAPPING_SETTING, SettingsReader, known_setting_ids

router = APIRouter()


def _require_admin_token(provided: Optional[str]) -> None:
    expected = settings.admin_token
    if not expected:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="ADMIN_TOKEN not configured",
        )
    if not provided or provided != expected:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid admin token")


@router.get("/settings", response_model=SettingsResponse)
def list_settings(
    x_admin_token: Optional[str] = Header(default=None, alias="X-Admin-Token"),
    db: Session = Depends(get_db),
):
    """List operator settings with their effective values."""
    _require_admin_token(x_admin_token)
    items = [SettingItem(**item) for item in SettingsReader(db).list_settings()]
    return SettingsResponse(count=len(items), settings=items)


@router.put("/settings/{setting_id}", response_model=SettingUpdateResponse)
def update_setting(
    setting_id: str,
    request: SettingUpdateRequest,
    x_admin_token: Optional[str] = Header(default=None, alias="X-Admin-Token"),
    db: Session = Depends(get_db),
):
    _require_admin_token(x_admin_token)

    if setting_id not in known_setting_ids():
        raise HTTPException(status_code=404, detail=f"Setting {setting_id} not found")

    if setting_id == CITY_MAPPING_SETTING:
        # Empty text is allowed and means "no mapping".
        result = parse_mapping(request.value)
        if not result.ok and result.error_code == PARSE_ERROR:
            raise HTTPException(status_code=400, detail=result.error)

    SettingsReader(db).set_value(setting_id, request.value)
    db.commit()

    return SettingUpdateResponse(success=True, id=setting_id, message=f"{setting_id} updated")
