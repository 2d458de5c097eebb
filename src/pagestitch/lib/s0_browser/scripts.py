"""Scripts JavaScript exécutés dans la page."""

JS_GET_VIEWPORT_SIZE = """
var height = undefined;
var width = undefined;
if (window.innerHeight) { height = window.innerHeight; }
else if (document.documentElement && document.documentElement.clientHeight) { height = document.documentElement.clientHeight; }
else { var b = document.getElementsByTagName('body')[0]; if (b.clientHeight) { height = b.clientHeight; } }
if (window.innerWidth) { width = window.innerWidth; }
else if (document.documentElement && document.documentElement.clientWidth) { width = document.documentElement.clientWidth; }
else { var b = document.getElementsByTagName('body')[0]; if (b.clientWidth) { width = b.clientWidth; } }
return [width, height];
"""

JS_GET_CURRENT_SCROLL_POSITION = """
var doc = document.documentElement;
var x = window.scrollX || ((window.pageXOffset || doc.scrollLeft) - (doc.clientLeft || 0));
var y = window.scrollY || ((window.pageYOffset || doc.scrollTop) - (doc.clientTop || 0));
return [x, y];
"""

JS_SET_SCROLL_POSITION = "window.scrollTo(arguments[0], arguments[1]);"

# scrollHeight peut être plus petit que clientHeight : on prend le maximum des deux.
JS_GET_CONTENT_ENTIRE_SIZE = """
var scrollWidth = document.documentElement.scrollWidth;
var bodyScrollWidth = document.body.scrollWidth;
var totalWidth = Math.max(scrollWidth, bodyScrollWidth);
var clientHeight = document.documentElement.clientHeight;
var bodyClientHeight = document.body.clientHeight;
var scrollHeight = document.documentElement.scrollHeight;
var bodyScrollHeight = document.body.scrollHeight;
var maxDocElementHeight = Math.max(clientHeight, scrollHeight);
var maxBodyHeight = Math.max(bodyClientHeight, bodyScrollHeight);
var totalHeight = Math.max(maxDocElementHeight, maxBodyHeight);
return [totalWidth, totalHeight];
"""

JS_GET_DEVICE_PIXEL_RATIO = "return window.devicePixelRatio;"

JS_SET_OVERFLOW = """
var origOverflow = document.documentElement.style.overflow;
document.documentElement.style.overflow = arguments[0];
return origOverflow;
"""

JS_SET_BODY_OVERFLOW = """
var origOverflow = document.body.style.overflow;
document.body.style.overflow = arguments[0];
return origOverflow;
"""

JS_GET_IS_BODY_OVERFLOW_HIDDEN = """
var styles = window.getComputedStyle(document.body, null);
var overflow = styles.getPropertyValue('overflow');
var overflowX = styles.getPropertyValue('overflow-x');
var overflowY = styles.getPropertyValue('overflow-y');
return overflow == 'hidden' || overflowX == 'hidden' || overflowY == 'hidden';
"""

JS_GET_COMPUTED_STYLE = """
var elem = arguments[0];
var styleProp = arguments[1];
if (window.getComputedStyle) {
    return window.getComputedStyle(elem, null).getPropertyValue(styleProp);
} else if (elem.currentStyle) {
    return elem.currentStyle[styleProp];
}
return null;
"""

JS_GET_ELEMENT_RECT = """
const el = arguments[0];
const rect = el.getBoundingClientRect();
return {left: rect.left, top: rect.top, width: rect.width, height: rect.height};
"""

JS_TRANSFORM_KEYS = ("transform", "-webkit-transform")

JS_GET_CURRENT_TRANSFORM = """
var keys = arguments[0];
var result = {};
for (var i = 0; i < keys.length; i++) {
    result[keys[i]] = document.documentElement.style[keys[i]];
}
return result;
"""

JS_SET_TRANSFORMS = """
var transforms = arguments[0];
for (var key in transforms) {
    if (transforms.hasOwnProperty(key)) {
        document.documentElement.style[key] = transforms[key];
    }
}
"""
