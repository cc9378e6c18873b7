# hirola

A small reactive UI toolkit. It builds node trees from observable state and renders
them to HTML strings, which suits server-side rendering and static generation.
It has no runtime dependencies beyond the standard library.

## Modules

- `hirola.signals`: `Mutable` values and `MutableVec` lists that notify subscribers.
  Lists report each change as a `VecDiff` of a given `DiffKind`. `subscribe` returns a
  `Subscription` that stops notifications when cancelled. `spawn` runs an awaitable on
  the running event loop; without a running loop the work is dropped.
- `hirola.nodes`: `SsrNode`, an in-memory tree of element, text, comment and fragment
  nodes (`NodeKind`) whose `str()` is HTML. Text and attribute values are escaped.
- `hirola.dom`: `Dom` wraps a node together with its child `Dom`s, side effects and
  event handlers. `render_into(value, parent)` renders strings, `None`, lists, tuples,
  iterators, `Mutable`/`ReadOnlyMutable` values and anything with a `render_into`
  method. `render_to_string(value)` returns the resulting HTML. Failures to place a
  node raise `RenderError`.
- `hirola.flow`: `Indexed`, `Mapped` and `render_map` render one template per item of a
  `MutableVec` (or any iterable) and update only the nodes each change touches.
- `hirola.switch`: `Switch` shows `renderer(value)` for the latest value of a boolean signal.
- `hirola.suspense`: `Suspense` renders `template(Loading())` at once and
  `template(result)` once its awaitable completes. `suspend` wraps a result in `Ready`.
- `hirola.noderef`: `NodeRef`, a slot that holds a node once it is set.
- `hirola.mixins`: `raw_text`, `raw_html` and `text` behaviours, applied with `apply_mixin`.
- `hirola.forms`: `FormHandler` holds a form value (a dataclass, dict or plain value) and
  reads and writes fields by dotted path (`dot_get`, `dot_set`). `Bind`, `Register`,
  `Model` and `model_input` connect fields and `Mutable`s to elements. Errors raise
  `FormError`.
- `hirola.styled`: `Style` builds CSS rules, including `@keyframes` and `@media`.
  `Styled` scopes class names to a component and writes its rules once to the shared
  list returned by `stylesheet()`.
- `hirola.router`: `Router` matches paths with parameters (`/users/:id`, `/users/{id}`,
  a final `*rest`) and re-renders its page whenever the current path changes.
- `hirola.app`: `App` ties a router to application state and renders a path to a string.

## Install

Install the project directory with pip. The `test` extra adds pytest and pytest-asyncio.

## Rendering

```python
from hirola.dom import Dom, render_to_string
from hirola.flow import render_map
from hirola.signals import Mutable, MutableVec

count = Mutable(0)
p = Dom.element("p")
p.append_render(count)
print(render_to_string(p))          # <p>0</p>


def li(item):
    node = Dom.element("li")
    node.append_render(str(item))
    return node


items = MutableVec([1, 2, 3])
ul = Dom.element("ul")
ul.append_render(render_map(items, li))
print(render_to_string(ul))
# <ul><li>1</li><li>2</li><li>3</li><!----></ul>
```

The `<!---->` comment at the end is the marker that keeps the position of the list.
While a rendered `Dom` is alive, changes to `items` (`push`, `insert`, `remove`,
`swap`, `replace`, ...) update its nodes in place; `Dom.discard()` stops that.

## Events

Handlers are registered with `Dom.event(name, handler)` and run with
`Dom.dispatch(name, event)`. `Router.link()`, `Register` and `Model` use this to react
to `click`, `input` and `change` events.

## Routing

```python
from hirola.app import App
from hirola.dom import Dom

app = App(state={})
app.route("/", lambda app: Dom.text("Home"))
app.route("/users/:id", lambda app: Dom.text("User"))
app.set_not_found(lambda app: Dom.text("Not Found"))

print(app.render_to_string("/"))         # Home
print(app.render_to_string("/missing"))  # Not Found

app.router.push("/users/42")
print(app.router.current_params())       # {'id': '42'}
```

Conflicting or malformed route patterns raise `RouteError`.

## Styles

```python
from hirola.styled import Style

style = Style()
style.add("foo", "width", "100px")
style.add("foo", "height", "100px")
print(style)
# foo {
#     width: 100px;
#     height: 100px;
# }
```

`style.rules(component)` compiles to compact CSS strings with `.class` selectors
rewritten to the component's scoped names.

## What it does not do

Everything renders into the in-memory `SsrNode` tree. There is no browser document,
no real event source and no command-line tool: events reach handlers only through
`Dom.dispatch`, the router's current path changes only through `Router.push`, and
`Styled` rules go to the in-memory list from `stylesheet()` rather than into a page.
`Suspense` and `spawn` need a running asyncio event loop to finish their work.