"""
Static model catalog keyed by the two-question decision tree.

    is_labeled=False                       -> unsupervised
    is_labeled=True, target=categorical    -> classification
    is_labeled=True, target=continuous     -> regression
"""
import enum
from typing import Dict, List, NamedTuple, Optional, Union

from mlworkflow.core.exceptions import CatalogError
from mlworkflow.schemas.catalog import CatalogOut, ModelDescriptor


class CatalogKind(str, enum.Enum):
    unsupervised = "unsupervised"
    classification = "classification"
    regression = "regression"


class TargetType(str, enum.Enum):
    categorical = "categorical"
    continuous = "continuous"


class Heading(NamedTuple):
    title: str
    description: str
    badge: str


MODELS_BY_KIND: Dict[CatalogKind, tuple] = {
    CatalogKind.unsupervised: (
        ModelDescriptor(
            name="K-Means Clustering",
            tag="Clustering",
            description="Unsupervised algorithm for grouping data into clusters. Perfect for customer "
                        "segmentation, anomaly detection, and pattern discovery.",
            path="/models/configure/kmeans",
        ),
        ModelDescriptor(
            name="PCA",
            tag="Dimensionality Reduction",
            description="Principal Component Analysis reduces dimensionality while preserving variance. "
                        "Ideal for visualization and preprocessing of high-dimensional data.",
            path="/models/configure/pca",
        ),
        ModelDescriptor(
            name="Autoencoder",
            tag="Deep Learning",
            description="Neural network used for feature learning and noise reduction. Useful for anomaly "
                        "detection and generating compressed data representations.",
            path="/models/configure/autoencoder",
        ),
    ),
    CatalogKind.classification: (
        ModelDescriptor(
            name="Random Forest",
            tag="Classification",
            description="Versatile ensemble algorithm that builds multiple decision trees. Excellent for "
                        "classification with high accuracy and feature importance.",
            path="/models/configure/random-forest",
        ),
        ModelDescriptor(
            name="SVM",
            tag="Classification",
            description="Support Vector Machines excel at classification tasks with clear margins of "
                        "separation. Powerful for high-dimensional spaces and text categorization.",
            path="/models/configure/svm",
        ),
        ModelDescriptor(
            name="Neural Network",
            tag="Deep Learning",
            description="Deep learning model for complex classification problems. Suited for image "
                        "classification, sentiment analysis, and multi-class problems.",
            path="/models/configure/neural-network-classifier",
        ),
    ),
    CatalogKind.regression: (
        ModelDescriptor(
            name="Linear Regression",
            tag="Regression",
            description="Predicts continuous values with linear relationships between features. Ideal for "
                        "sales forecasting, trend analysis and simple predictions.",
            path="/models/configure/linear-regression",
        ),
        ModelDescriptor(
            name="Gradient Boosting",
            tag="Regression",
            description="Advanced ensemble technique that builds models sequentially. Provides "
                        "state-of-the-art accuracy for structured data problems.",
            path="/models/configure/gradient-boosting",
        ),
        ModelDescriptor(
            name="Neural Network",
            tag="Deep Learning",
            description="Deep learning model for complex regression tasks. Well-suited for datasets with "
                        "non-linear relationships and multiple features.",
            path="/models/configure/neural-network-regressor",
        ),
    ),
}

HEADINGS: Dict[CatalogKind, Heading] = {
    CatalogKind.unsupervised: Heading(
        "Unsupervised Learning Models",
        "These models help you discover patterns and structure in unlabeled data",
        "Unsupervised Learning",
    ),
    CatalogKind.classification: Heading(
        "Classification Models",
        "These models predict categorical outcomes or class labels from your features",
        "Classification",
    ),
    CatalogKind.regression: Heading(
        "Regression Models",
        "These models predict continuous values based on your input features",
        "Regression",
    ),
}


def parse_target_type(value: Union[TargetType, str, None]) -> Optional[TargetType]:
    if value is None or isinstance(value, TargetType):
        return value
    try:
        return TargetType(value)
    except ValueError:
        raise CatalogError(f"unknown target type: {value!r}") from None


def resolve_kind(is_labeled: Optional[bool], target_type: Union[TargetType, str, None] = None) -> CatalogKind:
    """
    Map a decision-tree answer to a catalog kind.

    An unlabeled dataset always resolves to the unsupervised list; the
    target type is ignored in that case.
    """
    if is_labeled is None:
        raise CatalogError("dataset labeling has not been answered")
    if not is_labeled:
        return CatalogKind.unsupervised

    target = parse_target_type(target_type)
    if target is None:
        raise CatalogError("targetType is required for labeled datasets")
    if target is TargetType.categorical:
        return CatalogKind.classification
    return CatalogKind.regression


def models_for(is_labeled: Optional[bool], target_type: Union[TargetType, str, None] = None) -> List[ModelDescriptor]:
    return list(MODELS_BY_KIND[resolve_kind(is_labeled, target_type)])


def heading_for(kind: CatalogKind) -> Heading:
    return HEADINGS[kind]


def catalog_for(is_labeled: Optional[bool], target_type: Union[TargetType, str, None] = None) -> CatalogOut:
    kind = resolve_kind(is_labeled, target_type)
    heading = HEADINGS[kind]
    return CatalogOut(
        kind=kind.value,
        title=heading.title,
        description=heading.description,
        badge=heading.badge,
        models=list(MODELS_BY_KIND[kind]),
    )
