# Mock Store
