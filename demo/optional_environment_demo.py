#!/usr/bin/env python3
"""
Demo of optional environment objects.

Two counters are rendered side by side. Only the second one has an ancestor
supplying MyObject, so the first renders "Not found" and never shows a
slider, while the second follows the slider position.
"""

import logging

from izumi.ambient import (
    Host,
    ObservableObject,
    OptionalEnvironmentObject,
    Published,
    Slider,
    Text,
    View,
    VStack,
)

# Configure logging to see provisions and re-renders
logging.basicConfig(level=logging.DEBUG, format="%(name)s - %(levelname)s - %(message)s")


class MyObject(ObservableObject):
    """Shared state owned by the application."""

    number = Published(0.0)


class ContentView(View):
    object = OptionalEnvironmentObject(MyObject)

    def body(self):
        if self.object is not None:
            label = Text(f"Found: {self.object.number:g}")
        else:
            label = Text("Not found")
        return [label, SliderView()]


class SliderView(View):
    object = OptionalEnvironmentObject(MyObject)

    def body(self):
        wrapper = self.projected("object")
        if wrapper is None:
            return None
        return Slider(wrapper.number, bounds=(0.0, 1.0))


def main() -> None:
    print("🌳 Optional environment objects demo")
    print("=" * 40)

    model = MyObject()
    host = Host(
        VStack(
            ContentView(),
            ContentView().optional_environment_object(model),
        )
    )

    print("Initial render:")
    for text in host.texts():
        print(f"  {text}")

    sliders = host.find("Slider")
    print(f"\nSliders rendered: {len(sliders)}")

    slider = sliders[0].view
    assert isinstance(slider, Slider)
    slider.set(0.5)

    print("\nAfter moving the slider to 0.5:")
    for text in host.texts():
        print(f"  {text}")

    assert host.texts() == ["Not found", "Found: 0.5"]
    host.close()
    print("\n✅ Demo completed")


if __name__ == "__main__":
    main()
