from typing import TYPE_CHECKING, Any, Callable, Dict, Iterable, Optional, Tuple, Union

from pydantic import ValidationError

from thumbor_url.core.errors import ConfigurationError, configuration_error
from thumbor_url.schemas.filters import Filter
from thumbor_url.schemas.geometry import RectLike, to_rect
from thumbor_url.schemas.options import (
    KEEP_RATIO,
    Dimension,
    FitIn,
    HAlignment,
    Resize,
    ResponseMode,
    TransformOptions,
    Trim,
    TrimOrientation,
    VAlignment,
)

if TYPE_CHECKING:
    from thumbor_url.services.server import Server


def _checked(field: str, factory: Callable[..., Any], *args, **kwargs) -> Any:
    """Call `factory`, reporting any validation failure against `field`."""
    try:
        return factory(*args, **kwargs)
    except ValidationError as e:
        raise configuration_error(field, e)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(str(e), field=field, original_exception=e)


class EndpointBuilder:
    """Fluent, immutable configuration of an image URL.

    Every method returns a new builder, so a partially configured builder can
    be shared and extended safely:

        thumbnail = server.endpoint_builder().resize(300, 200).smart()
        url = thumbnail.filter(Filter.grayscale()).to_url("path/to/my/image.jpg")
    """

    def __init__(self, server: "Server", fields: Optional[Dict[str, Any]] = None):
        self._server = server
        self._fields: Dict[str, Any] = dict(fields or {})

    def _with(self, **changes) -> "EndpointBuilder":
        fields = dict(self._fields)
        fields.update(changes)
        return EndpointBuilder(self._server, fields)

    @property
    def server(self) -> "Server":
        return self._server

    def response(self, mode: Union[ResponseMode, str, None]) -> "EndpointBuilder":
        if mode is not None:
            mode = _checked("response", ResponseMode, mode)
        return self._with(response=mode)

    def meta(self, enabled: bool = True) -> "EndpointBuilder":
        """Ask for the JSON description of the operations instead of the image."""
        return self.response(ResponseMode.METADATA if enabled else None)

    def debug(self, enabled: bool = True) -> "EndpointBuilder":
        return self.response(ResponseMode.DEBUG if enabled else None)

    def trim(self, orientation: Union[TrimOrientation, str] = TrimOrientation.TOP_LEFT,
             tolerance: Optional[int] = None) -> "EndpointBuilder":
        return self._with(trim=_checked("trim", Trim, orientation=orientation, tolerance=tolerance))

    def crop(self, box: RectLike) -> "EndpointBuilder":
        """Manual crop from the top-left corner to the bottom-right one.

        Raises:
            ConfigurationError: If the corners are reversed or the box is empty
        """
        return self._with(crop=_checked("crop", to_rect, box))

    def fit_in(self, mode: Union[FitIn, str] = FitIn.DEFAULT) -> "EndpointBuilder":
        return self._with(fit_in=_checked("fit_in", FitIn, mode))

    def resize(self, width: Union[Dimension, Tuple[Dimension, Dimension]],
               height: Dimension = KEEP_RATIO, no_upscale: bool = False) -> "EndpointBuilder":
        """Resize to `width` x `height`, a `(width, height)` tuple is accepted too.

        Raises:
            ConfigurationError: If a dimension is negative or not a number
        """
        if isinstance(width, tuple):
            width, height = width
        return self._with(resize=_checked("resize", Resize, width=width, height=height, no_upscale=no_upscale))

    def flip(self, horizontal: bool = True, vertical: bool = True) -> "EndpointBuilder":
        return self._with(flip_horizontal=horizontal, flip_vertical=vertical)

    def flip_horizontal(self, enabled: bool = True) -> "EndpointBuilder":
        return self._with(flip_horizontal=enabled)

    def flip_vertical(self, enabled: bool = True) -> "EndpointBuilder":
        return self._with(flip_vertical=enabled)

    def h_align(self, alignment: Union[HAlignment, str]) -> "EndpointBuilder":
        return self._with(h_align=_checked("h_align", HAlignment, alignment))

    def v_align(self, alignment: Union[VAlignment, str]) -> "EndpointBuilder":
        return self._with(v_align=_checked("v_align", VAlignment, alignment))

    def smart(self, enabled: bool = True) -> "EndpointBuilder":
        return self._with(smart=enabled)

    def filter(self, item: Union[Filter, str]) -> "EndpointBuilder":
        """Append one filter to the pipeline. Strings use the `name(args)` form."""
        if isinstance(item, str):
            item = Filter.parse(item)
        elif not isinstance(item, Filter):
            raise ConfigurationError(f"expected a Filter, got {type(item).__name__}", field="filters")
        return self._with(filters=self._fields.get("filters", ()) + (item,))

    def filters(self, items: Iterable[Union[Filter, str]]) -> "EndpointBuilder":
        builder = self
        for item in items:
            builder = builder.filter(item)
        return builder

    def build(self) -> TransformOptions:
        """Freeze the configuration.

        Raises:
            ConfigurationError: If the combined options are invalid
        """
        try:
            return TransformOptions(**self._fields)
        except ValidationError as e:
            errors = e.errors()
            field = str(errors[0]["loc"][0]) if errors and errors[0].get("loc") else "options"
            raise configuration_error(field, e)

    def to_path(self, image_path: str) -> str:
        return self._server.to_path(self.build(), image_path)

    def to_url(self, image_path: str) -> str:
        return self._server.to_url(self.build(), image_path)

    def __repr__(self) -> str:
        return f"EndpointBuilder({self._fields!r})"
