from typing import Annotated, Optional

from pydantic import BeforeValidator

from dealdesk.valuation.numeric import to_number, to_optional_number

# Form fields arrive as strings, blanks or junk; these coerce instead of failing validation.
LooseNumber = Annotated[Optional[float], BeforeValidator(to_optional_number)]
Number = Annotated[float, BeforeValidator(to_number)]

MultipleTriplet = tuple[float, float, float]
