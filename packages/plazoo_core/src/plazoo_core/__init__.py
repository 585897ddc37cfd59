"""
Plazoo Core - storefront logic

Independent from any UI. It provides:
- Tenant branding (color transform, scoped theme variables)
- Catalog variants (combination generator, variant selection)
- Pricing (line/order totals, discounts, BRL formatting, carts)
- Tenancy (store directory, selection storage, store context resolver)
- Orders (atomic, idempotent order submission)

Persistence, authentication and row-level security belong to the hosted
backend; this package only reads from it and hands it order payloads.
"""
