from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from .documents import DocumentValidationError, Scalar, expect_list, expect_mapping, require_number, require_scalar


class TransformKind(str, Enum):
    CONTEXT = "contexttransformation"
    AFFINE = "affinetransform"


class TransformStep(str, Enum):
    TRANSLATE = "translate"
    SCALE = "scale"
    ROTATE = "rotate"


def make_contexttransformation() -> list[dict[str, Any]]:
    return []


def add_translatetransform(transformations: list[dict[str, Any]], translation: dict[str, Any]) -> list[dict[str, Any]]:
    transformations.append(
        {"transformationtype": TransformStep.TRANSLATE.value, "translation": expect_mapping(translation, "translation")}
    )
    return transformations


def add_scaletransform(transformations: list[dict[str, Any]], scale: dict[str, Any]) -> list[dict[str, Any]]:
    transformations.append({"transformationtype": TransformStep.SCALE.value, "scale": expect_mapping(scale, "scale")})
    return transformations


def add_rotatetransform(transformations: list[dict[str, Any]], rotation: Scalar) -> list[dict[str, Any]]:
    transformations.append(
        {"transformationtype": TransformStep.ROTATE.value, "rotation": require_scalar(rotation, "rotation")}
    )
    return transformations


def make_affinetransform(
    m11: float = 1.0,
    m12: float = 0.0,
    m21: float = 0.0,
    m22: float = 1.0,
    tX: Scalar = 0.0,
    tY: Scalar = 0.0,
) -> dict[str, Any]:
    return {
        "m11": require_number(m11, "m11"),
        "m12": require_number(m12, "m12"),
        "m21": require_number(m21, "m21"),
        "m22": require_number(m22, "m22"),
        "tX": require_scalar(tX, "tX"),
        "tY": require_scalar(tY, "tY"),
    }


@dataclass(frozen=True)
class ElementTransform:
    """The single transform slot a draw instruction may carry."""

    kind: TransformKind
    value: Any

    def __post_init__(self) -> None:
        if self.kind == TransformKind.CONTEXT:
            steps = expect_list(self.value, "contexttransformation")
            for i, step in enumerate(steps):
                tag = expect_mapping(step, f"contexttransformation[{i}]").get("transformationtype")
                try:
                    TransformStep(tag)
                except ValueError as exc:
                    raise DocumentValidationError(
                        f"contexttransformation[{i}].transformationtype is invalid: {tag!r}"
                    ) from exc
        else:
            expect_mapping(self.value, "affinetransform")

    @staticmethod
    def context(steps: list[dict[str, Any]]) -> ElementTransform:
        return ElementTransform(TransformKind.CONTEXT, steps)

    @staticmethod
    def affine(matrix: dict[str, Any]) -> ElementTransform:
        return ElementTransform(TransformKind.AFFINE, matrix)

    def apply(self, document: dict[str, Any]) -> None:
        document[self.kind.value] = self.value
