"""Browser viewer page that draws a score with OpenSheetMusicDisplay."""

from string import Template

from .codec import encode_payload

OSMD_SCRIPT_URL = (
    "https://cdnjs.cloudflare.com/ajax/libs/opensheetmusicdisplay/1.8.8/"
    "opensheetmusicdisplay.min.js"
)

DRAWING_PRESETS = frozenset(
    {
        "default",
        "compact",
        "compacttight",
        "beginner",
        "leadsheet",
        "preview",
        "thumbnail",
        "allon",
    }
)

# The payload only ever contains unreserved URI characters and %XX escapes.
_PAGE = Template(
    """<!DOCTYPE html>
<html>
  <head>
    <meta charset="utf-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1.0, maximum-scale=1.0, user-scalable=no" />
    <script src="$script_url"></script>
    <style>
      body { margin: 0; padding: 0; background-color: #fff; }
      #osmdCanvas { width: 100%; height: 100vh; overflow-y: scroll; }
      #renderError { display: none; padding: 20px; color: #b00020; font-family: sans-serif; }
    </style>
  </head>
  <body>
    <div id="osmdCanvas"></div>
    <div id="renderError"></div>
    <script>
      var attemptId = $attempt_id;

      function postOutcome(outcome) {
        outcome.attempt_id = attemptId;
        var message = JSON.stringify(outcome);
        if (window.ReactNativeWebView) {
          window.ReactNativeWebView.postMessage(message);
        } else if (window.parent && window.parent !== window) {
          window.parent.postMessage(message, "*");
        }
      }

      function showError(stage, err) {
        var text = (err && err.message) ? err.message : String(err);
        document.getElementById("osmdCanvas").style.display = "none";
        var box = document.getElementById("renderError");
        box.textContent = text;
        box.style.display = "block";
        postOutcome({type: "error", stage: stage, message: text});
      }

      try {
        var musicXml = decodeURIComponent("$payload");
        var osmd = new opensheetmusicdisplay.OpenSheetMusicDisplay("osmdCanvas", {
          autoResize: true,
          backend: "svg",
          drawingParameters: "$drawing_parameters",
          drawTitle: true
        });
        osmd.load(musicXml).then(function () {
          try {
            osmd.render();
            postOutcome({type: "success"});
          } catch (err) {
            showError("layout", err);
          }
        }, function (err) {
          showError("load", err);
        });
      } catch (err) {
        showError("unknown", err);
      }
    </script>
  </body>
</html>
"""
)


def build_viewer_page(
    document: str, attempt_id: int = 1, drawing_parameters: str = "compacttight"
) -> str:
    """
    Builds a self-contained viewer page for a notation document.

    Args:
        document: MusicXML text, embedded percent-encoded.
        attempt_id: Attempt id echoed back in posted outcome messages.
        drawing_parameters: OpenSheetMusicDisplay drawing preset.

    Returns:
        The HTML page.

    Raises:
        ValueError: If the document is empty or the preset is not one of
            DRAWING_PRESETS.
    """
    if not document:
        raise ValueError("document must be a non-empty string")
    if drawing_parameters not in DRAWING_PRESETS:
        raise ValueError(f"unknown drawing preset: {drawing_parameters!r}")
    return _PAGE.substitute(
        script_url=OSMD_SCRIPT_URL,
        attempt_id=int(attempt_id),
        payload=encode_payload(document),
        drawing_parameters=drawing_parameters,
    )
