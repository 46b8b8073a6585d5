from silkcss.layers.classifier import LayerClassifier

__all__ = ["LayerClassifier"]
