"""Family finance forecasting back end."""
