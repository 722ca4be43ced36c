from typing import Annotated

from pydantic import Field

from lendpair.constants import MAX_UINT64, MIN_UINT64

type ValidatedUint64 = Annotated[int, Field(strict=True, ge=MIN_UINT64, le=MAX_UINT64)]
type ValidatedUint64NonZero = Annotated[int, Field(strict=True, gt=MIN_UINT64, le=MAX_UINT64)]
