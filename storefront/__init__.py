# Storefront cart, pricing and checkout
