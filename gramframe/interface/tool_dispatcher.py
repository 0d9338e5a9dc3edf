class ToolDispatcher:
    """
   Lightweight router for canvas events.

   Accepts any canvas object that exposes the callback attributes
   (on_press, on_motion, on_release, on_leave, on_key). It does not depend
   on Qt or SpectrogramCanvas directly.
   """
    def __init__(self, canvas):
        self.canvas = canvas
        # permanent
        self._perm_press = None
        self._perm_motion = None
        self._perm_release = None
        self._perm_leave = None
        self._perm_key = None

        # temporary (tool)
        self._tmp_press = None
        self._tmp_motion = None
        self._tmp_release = None
        self._tmp_leave = None
        self._tmp_key = None
        # bind shims
        self.canvas.on_press = self._shim_press
        self.canvas.on_motion = self._shim_motion
        self.canvas.on_release = self._shim_release
        self.canvas.on_leave = self._shim_leave
        self.canvas.on_key = self._shim_key

    # setters: temporary (default) or permanent
    def set_press(self, func, *, temporary=True):
        if temporary:
            self._tmp_press = func
        else:
            self._perm_press = func
    def set_motion(self, func, *, temporary=True):
        if temporary:
            self._tmp_motion = func
        else:
            self._perm_motion = func
    def set_release(self, func, *, temporary=True):
        if temporary:
            self._tmp_release = func
        else:
            self._perm_release = func
    def set_leave(self, func, *, temporary=True):
        if temporary:
            self._tmp_leave = func
        else:
            self._perm_leave = func
    def set_key(self, func, *, temporary=True):
        if temporary:
            self._tmp_key = func
        else:
            self._perm_key = func

    def bind_engine(self, engine, *, temporary=False):
        """Route every pointer and key event to a GramFrame engine."""
        self.set_press(engine.mouse_down, temporary=temporary)
        self.set_motion(engine.mouse_move, temporary=temporary)
        self.set_release(engine.mouse_up, temporary=temporary)
        self.set_leave(engine.mouse_leave, temporary=temporary)
        self.set_key(engine.key_press, temporary=temporary)

    def clear_all_temp(self):
        self._tmp_press = self._tmp_motion = self._tmp_release = None
        self._tmp_leave = self._tmp_key = None

    # clear all for teardown methods
    def clear(self):
        self._perm_press = self._perm_motion = self._perm_release = None
        self._perm_leave = self._perm_key = None
        self.clear_all_temp()

    # shims prefer temp, then perm
    def _shim_press(self, x, y, **kw):
        f = self._tmp_press or self._perm_press
        if callable(f): f(x, y, **kw)
    def _shim_motion(self, x, y, **kw):
        f = self._tmp_motion or self._perm_motion
        if callable(f): f(x, y, **kw)
    def _shim_release(self, x, y, **kw):
        f = self._tmp_release or self._perm_release
        if callable(f): f(x, y, **kw)
    def _shim_leave(self):
        f = self._tmp_leave or self._perm_leave
        if callable(f): f()
    def _shim_key(self, key, shift=False):
        f = self._tmp_key or self._perm_key
        if callable(f): return f(key, shift=shift)
        return False
