from pathtracer.pdf.pdf import CosinePdf, MixturePdf, Pdf, PrimitivePdf, SpherePdf

__all__ = ["Pdf", "CosinePdf", "SpherePdf", "PrimitivePdf", "MixturePdf"]
