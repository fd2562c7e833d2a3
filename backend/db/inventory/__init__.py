"""
Emergency resource inventory.

Models:
- Item (resource type master data: code, color, unit of measure)
- Stock (quantity of an item held by an owner at a store, one per owner+item)
- Adjustment (addition/deduction event against a stock)
"""
