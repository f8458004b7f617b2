"""C# code model, assembly and rendering."""
