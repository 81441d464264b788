"""
Add Restaurant Screen Model

Form for registering a restaurant. The banner image is referenced by an
already-uploaded URL.
"""

import logging
from typing import Any

from pydantic import ValidationError

from foodingo.core.exceptions import ApiError, FoodingoError
from foodingo.forms import FieldType, FormField, FormState
from foodingo.schemas import ImageRef, RestaurantCreate
from foodingo.screens.base import ScreenModel, ScreenResult
from foodingo.store import SessionStore

logger = logging.getLogger(__name__)

RESTAURANT_FIELDS = [
    FormField(name="name", label="Restaurant Name", required=True),
    FormField(name="location", label="Location", required=True),
    FormField(name="image", label="Banner Image", type=FieldType.IMAGE, required=True),
]


def _image_url(value: Any) -> str:
    if isinstance(value, ImageRef):
        return value.url
    if isinstance(value, dict):
        return value.get("url") or ""
    return ""


class AddRestaurantScreen(ScreenModel):

    def __init__(self, store: SessionStore):
        super().__init__(store)
        self.form = FormState(RESTAURANT_FIELDS)

    def set_field(self, name: str, value: Any) -> None:
        self.form.set(name, value)

    def _validation_message(self) -> str:
        data = self.form.data
        if not (data.get("name") or "").strip():
            return "Please enter restaurant name"
        if not (data.get("location") or "").strip():
            return "Please enter restaurant location"
        if not _image_url(data.get("image")):
            return "Please upload restaurant banner image"
        return ""

    async def submit(self) -> ScreenResult:
        message = self._validation_message()
        if message:
            self.form.validate()
            self.notifier.error("Validation Error", message)
            return ScreenResult(success=False, error="validation")

        if not await self.store.has_token():
            self.notifier.error("Authentication Error", "Please login again")
            return ScreenResult(success=False, error="auth", requires_login=True)

        user = self.store.user
        try:
            restaurant = RestaurantCreate(
                name=self.form.data["name"].strip(),
                location=self.form.data["location"].strip(),
                image=ImageRef(url=_image_url(self.form.data["image"])),
                owner=user.id if user else None,
            )
        except ValidationError as e:
            self.notifier.error("Validation Error", f"{e.error_count()} invalid field(s)")
            return ScreenResult(success=False, error="validation")

        self.form.is_submitting = True
        try:
            response = await self.api.create_restaurant(restaurant)
        except ApiError as e:
            logger.warning(f"Restaurant creation failed: {e}")
            self.notifier.error("Error", e.server_message or e.message or "Something went wrong")
            return ScreenResult(success=False, error=str(e))
        except FoodingoError as e:
            logger.warning(f"Restaurant creation failed: {e}")
            self.notifier.error("Error", e.message or "Something went wrong")
            return ScreenResult(success=False, error=str(e))
        finally:
            if self.mounted:
                self.form.is_submitting = False

        if not response.success:
            self.notifier.error("Failed", response.message or "Restaurant creation failed")
            return ScreenResult(success=False, error=response.message or "rejected")

        self.notifier.success("Restaurant Created Successfully")
        return ScreenResult(success=True)
