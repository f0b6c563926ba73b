"""Modification catalog: named constructors and random creation per data kind.

Usage:
    from modvar.catalog import byte_array, integer

    var.add_modification(byte_array.xor("FF", 0))
    var.add_modification(integer.create_random_modification(rng, bits=64))
"""
