"""exact128: overflow-exact multiply-divide over u128."""
