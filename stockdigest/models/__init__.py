from stockdigest.models.stock_news import StockNews

__all__ = ["StockNews"]
