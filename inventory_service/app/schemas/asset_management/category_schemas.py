from typing import Optional

from shared.wrappers.empty_string_model_wrapper import EmptyStringModel


class CategoryCreate(EmptyStringModel):
    value: Optional[str] = None
