from pydantic import BaseModel


class SweepRequest(BaseModel):
    dry_run: bool = False


class SweepResponse(BaseModel):
    cutoff: str
    products_deleted: int
    images_deleted: int
    images_missing: int
    images_failed: int
    dry_run: bool
