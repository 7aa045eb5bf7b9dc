"""
The marker attribute.

Its source is added to the generator's private compilation so that field
attributes can be bound to it, and it is also emitted as a fragment so the
generated project contains a concrete definition.
"""

from __future__ import annotations

MARKER_METADATA_NAME = "PrintableFields.PrintableAttribute"

MARKER_FRAGMENT_KEY = MARKER_METADATA_NAME

MARKER_SOURCE_PATH = f"{MARKER_METADATA_NAME}.cs"

MARKER_SOURCE = """using System;

namespace PrintableFields
{
    [AttributeUsage(AttributeTargets.Field, Inherited = false, AllowMultiple = false)]
    sealed class PrintableAttribute : Attribute
    {
        public PrintableAttribute()
        {
        }
    }
}
"""
